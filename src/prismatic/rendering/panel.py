"""Control panel built from matplotlib widgets.

One widget per registered parameter, laid out top to bottom in folder
order: a :class:`~matplotlib.widgets.Slider` for floats,
:class:`~matplotlib.widgets.CheckButtons` for booleans and
:class:`~matplotlib.widgets.RadioButtons` for enums.  Widget changes
are written through :class:`~prismatic.controls.ControlBindings`; every
write from any source refreshes every widget.
"""

from __future__ import annotations

import math

from matplotlib.figure import Figure
from matplotlib.widgets import CheckButtons, RadioButtons, Slider

from prismatic.controls import ControlBindings, ParameterSpec

_PANEL_BG = (0.10, 0.10, 0.12)
_WIDGET_BG = (0.18, 0.18, 0.22)
_TEXT_COLOUR = (0.92, 0.92, 0.92)
_TITLE_COLOUR = (0.65, 0.80, 1.0)
_TITLE_FONT_SIZE = 9.0
_LABEL_FONT_SIZE = 8.0
_SLIDER_LABEL_FRACTION = 0.42  # of the panel width, left of each slider
_VALUE_FORMAT = "%.3f"

Widget = Slider | CheckButtons | RadioButtons


def _rows_for(spec: ParameterSpec) -> int:
    if spec.value_type == "enum":
        return len(spec.choices)
    return 1


def _show_slider_value(slider: Slider, value: float) -> None:
    """Move *slider* to *value* and print *value* beside it.

    Rotation angles are stored unwrapped and can leave the slider's
    ``[-pi, pi]`` range.  The knob then sits at the equivalent angle
    inside the range while the text keeps the stored value.
    """
    knob = value
    if not slider.valmin <= value <= slider.valmax:
        knob = math.remainder(value, math.tau)
        knob = min(slider.valmax, max(slider.valmin, knob))
    if knob != slider.val:
        slider.set_val(knob)
    slider.valtext.set_text(_VALUE_FORMAT % value)


class ControlPanel:
    """Grouped widgets mirroring a :class:`ControlBindings` record.

    Args:
        figure: Figure to add the widget axes to.
        bindings: The binding layer to read from and write to.
        rect: ``(left, bottom, width, height)`` of the panel in figure
            coordinates.
        title: Heading drawn above the first folder.
    """

    def __init__(
        self,
        figure: Figure,
        bindings: ControlBindings,
        rect: tuple[float, float, float, float] = (0.7, 0.0, 0.3, 1.0),
        *,
        title: str = "Prism Controls",
    ) -> None:
        self.figure = figure
        self.bindings = bindings
        self.widgets: dict[str, Widget] = {}
        self._build(rect, title)
        self._unsubscribe = bindings.subscribe(lambda _names: self.refresh_display())
        self.refresh_display()

    # ---- Layout ----

    def _build(self, rect: tuple[float, float, float, float], title: str) -> None:
        left, bottom, width, height = rect
        folders = self.bindings.folders()
        # One row for the panel title, one per folder heading, then the
        # widgets themselves.
        n_rows = 1 + len(folders) + sum(
            _rows_for(s) for specs in folders.values() for s in specs
        )
        row_h = height / (n_rows + 1)
        pad = 0.04 * width

        bg = self.figure.add_axes(rect, zorder=-1)
        bg.set_facecolor(_PANEL_BG)
        bg.set_xticks([])
        bg.set_yticks([])
        for spine in bg.spines.values():
            spine.set_visible(False)

        top = bottom + height - row_h * 0.5
        self.figure.text(
            left + pad, top - row_h * 0.5, title,
            color=_TEXT_COLOUR, fontsize=_TITLE_FONT_SIZE + 1, weight="bold",
            va="center",
        )
        top -= row_h

        for folder, specs in folders.items():
            self.figure.text(
                left + pad, top - row_h * 0.5, folder,
                color=_TITLE_COLOUR, fontsize=_TITLE_FONT_SIZE, weight="bold",
                va="center",
            )
            top -= row_h
            for spec in specs:
                rows = _rows_for(spec)
                cell = (left + pad, top - rows * row_h + 0.15 * row_h,
                        width - 2 * pad, rows * row_h - 0.3 * row_h)
                self.widgets[spec.name] = self._make_widget(spec, cell)
                top -= rows * row_h

    def _make_widget(
        self, spec: ParameterSpec, cell: tuple[float, float, float, float],
    ) -> Widget:
        x, y, w, h = cell
        value = self.bindings.get(spec.name)

        if spec.value_type == "float":
            label_w = _SLIDER_LABEL_FRACTION * w
            ax = self.figure.add_axes((x + label_w, y, w - label_w * 1.35, h))
            ax.set_facecolor(_WIDGET_BG)
            lo, hi = spec.range_hint.min_value, spec.range_hint.max_value
            slider = Slider(
                ax, spec.label, lo, hi,
                valinit=min(hi, max(lo, value)),
                valstep=spec.range_hint.step,
                valfmt=_VALUE_FORMAT,
            )
            slider.label.set_color(_TEXT_COLOUR)
            slider.label.set_fontsize(_LABEL_FONT_SIZE)
            slider.valtext.set_color(_TEXT_COLOUR)
            slider.valtext.set_fontsize(_LABEL_FONT_SIZE)
            slider.on_changed(lambda v, name=spec.name: self._on_widget(name, v))
            return slider

        ax = self.figure.add_axes((x, y, w, h))
        ax.set_facecolor(_WIDGET_BG)
        for spine in ax.spines.values():
            spine.set_visible(False)

        if spec.value_type == "bool":
            check = CheckButtons(ax, [spec.label], [bool(value)])
            for text in check.labels:
                text.set_color(_TEXT_COLOUR)
                text.set_fontsize(_LABEL_FONT_SIZE)
            check.on_clicked(
                lambda _label, name=spec.name, widget=check:
                    self._on_widget(name, widget.get_status()[0])
            )
            return check

        radio = RadioButtons(
            ax, list(spec.choices), active=list(spec.choices).index(str(value)),
        )
        for text in radio.labels:
            text.set_color(_TEXT_COLOUR)
            text.set_fontsize(_LABEL_FONT_SIZE)
        radio.on_clicked(lambda label, name=spec.name: self._on_widget(name, label))
        return radio

    # ---- Synchronisation ----

    def _on_widget(self, name: str, value: object) -> None:
        self.bindings.set(name, value)

    def refresh_display(self) -> None:
        """Show the current record value in every widget.

        Widget callbacks are suppressed while refreshing, so this never
        writes back into the bindings.
        """
        for name, widget in self.widgets.items():
            value = self.bindings.get(name)
            widget.eventson = False
            try:
                if isinstance(widget, Slider):
                    _show_slider_value(widget, float(value))
                elif isinstance(widget, CheckButtons):
                    if widget.get_status()[0] != bool(value):
                        widget.set_active(0)
                else:
                    if widget.value_selected != str(value):
                        widget.set_active(self.bindings.spec(name).choices.index(str(value)))
            finally:
                widget.eventson = True
        self.figure.canvas.draw_idle()

    def disconnect(self) -> None:
        """Stop following the bindings."""
        self._unsubscribe()
