"""
Page Renderer
=============

Builds the HTML surface of the viewer from a ViewModel.

The page holds one image at a fixed width and, when controls are visible,
a play/pause toggle and a horizontal "Timeline" slider. A small script keeps
the page in sync through the /ws/view feed and posts user actions back.
"""

from html import escape

from logo_replay.view.derive import ViewModel


_SCRIPT = """
<script>
(function () {
  var proto = location.protocol === "https:" ? "wss://" : "ws://";
  var ws = new WebSocket(proto + location.host + "/ws/view");
  ws.onmessage = function (msg) {
    var view = JSON.parse(msg.data);
    var status = document.getElementById("status");
    var logo = document.getElementById("logo");
    var slider = document.getElementById("timeline");
    var toggle = document.getElementById("toggle");
    status.textContent = view.status_text || "";
    logo.hidden = view.status_text !== null;
    logo.src = "data:image/png;base64," + view.image;
    if (slider) {
      slider.max = view.slider_max;
      slider.value = view.cursor;
    }
    if (toggle) {
      toggle.textContent = view.playing ? "Pause" : "Play";
    }
  };
})();
</script>
"""


def render_controls(view: ViewModel) -> str:
    """Play/pause toggle and timeline slider."""
    label = "Pause" if view.playing else "Play"
    return (
        '<button id="toggle" type="button" '
        'onclick="fetch(\'/toggle\', {method: \'POST\'})">'
        f"{label}</button>"
        '<label for="timeline">Timeline</label>'
        '<input id="timeline" type="range" '
        f'min="{view.slider_min}" max="{view.slider_max}" value="{view.cursor}" '
        'oninput="fetch(\'/cursor?position=\' + this.value, {method: \'POST\'})">'
    )


def render_page(view: ViewModel, image_width: int = 500, title: str = "Logo history") -> str:
    """
    Render the full viewer page.

    Args:
        view: Current view model
        image_width: Fixed display width of the logo in pixels
        title: Document title

    Returns:
        HTML document as a string
    """
    status = escape(view.status_text or "")
    hidden = " hidden" if view.status_text is not None else ""
    caption = escape(view.time or "")
    controls = render_controls(view) if view.show_controls else ""

    return (
        "<!DOCTYPE html>"
        "<html><head>"
        '<meta charset="utf-8">'
        f"<title>{escape(title)}</title>"
        "</head><body>"
        f'<p id="status">{status}</p>'
        f'<img id="logo" width="{image_width}" alt="{caption}" '
        f'src="data:image/png;base64,{escape(view.image)}"{hidden}>'
        f"{controls}"
        f"{_SCRIPT}"
        "</body></html>"
    )
