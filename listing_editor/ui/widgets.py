# listing_editor/ui/widgets.py

"""Supporting widgets and screens for the listing editor."""

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen, Screen
from textual.widget import Widget
from textual.widgets import Button, Footer, Input, Static

from listing_editor.models.geolocation import GeoPoint

logger = logging.getLogger("listing_editor.ui")


class LocationPanel(Widget):
    """Stand-in for the map widget.

    The editor only consumes the panel through :class:`MarkerMoved`,
    which carries coordinates and address together.
    """

    class MarkerMoved(Message):
        """The marker was placed and its address resolved."""

        def __init__(self, point: GeoPoint) -> None:
            self.point = point
            super().__init__()

    def compose(self) -> ComposeResult:
        with Horizontal(id="coords"):
            yield Input(placeholder="Latitude", id="marker_lat")
            yield Input(placeholder="Longitude", id="marker_lng")
        yield Input(placeholder="Address", id="marker_address")
        yield Button("Place marker", id="place_marker_btn")

    def show_point(self, point: GeoPoint) -> None:
        """Reflect a point loaded from elsewhere in the inputs."""
        self.query_one("#marker_lat", Input).value = str(point.latitude)
        self.query_one("#marker_lng", Input).value = str(point.longitude)
        self.query_one("#marker_address", Input).value = point.address

    def on_input_changed(self, event: Input.Changed) -> None:
        # Marker inputs are not form fields
        event.stop()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Publish the typed location as a single marker event."""
        event.stop()
        if event.button.id != "place_marker_btn":
            return
        lat_raw = self.query_one("#marker_lat", Input).value.strip()
        lng_raw = self.query_one("#marker_lng", Input).value.strip()
        address = self.query_one("#marker_address", Input).value.strip()
        try:
            point = GeoPoint(
                latitude=float(lat_raw),
                longitude=float(lng_raw),
                address=address,
            )
        except ValueError:
            self.notify(
                "Latitude and longitude must be numbers",
                severity="error",
            )
            return
        self.post_message(self.MarkerMoved(point))


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no prompt shown before the save runs."""

    BINDINGS = [
        Binding("y", "answer(True)", "Yes"),
        Binding("n", "answer(False)", "No"),
        Binding("escape", "answer(False)", "Cancel"),
    ]

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm_dialog"):
            yield Static(self.prompt, id="confirm_prompt")
            with Horizontal(id="confirm_buttons"):
                yield Button("Yes", variant="primary", id="confirm_yes")
                yield Button("No", id="confirm_no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm_yes")

    def action_answer(self, answer: bool) -> None:
        self.dismiss(answer)


class LandingScreen(Screen[None]):
    """Shown after a successful save."""

    BINDINGS = [Binding("q", "app.quit", "Quit")]

    def __init__(self, product_id: str) -> None:
        super().__init__()
        self.product_id = product_id

    def compose(self) -> ComposeResult:
        yield Static(
            f"✅ Listing {self.product_id} saved", id="landing_message"
        )
        yield Footer()
