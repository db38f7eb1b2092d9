"""Demo script: render both prism shapes to PNG, then open the viewer."""

from pathlib import Path

from prismatic import PrismScene, run_viewer

OUTPUT_DIR = Path(__file__).resolve().parent


def main():
    scene = PrismScene.compose(particle_seed=0)
    print(f"Scene nodes: {len(scene.graph)}")
    print(f"Glass users: {len(scene.graph.users_of(scene.glass))} meshes")

    for shape, name in [("Bi-Pyramid", "bipyramid.png"), ("Single Pyramid", "pyramid.png")]:
        scene.set_active_shape(shape)
        output = OUTPUT_DIR / name
        scene.render_still(output, show=False)
        print(f"Rendered {shape} to {output}")

    scene.set_beam_visible(True)
    scene.render_still(OUTPUT_DIR / "pyramid_beam.png", show=False)

    settings = run_viewer()
    print(f"Final orientation: {settings.orientation}")


if __name__ == "__main__":
    main()
