# listing_editor/ui/app.py

"""Terminal UI for editing an existing marketplace listing."""

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    Select,
    Static,
    TextArea,
)

from listing_editor.config.settings import Settings
from listing_editor.models.image_ref import ImageRef, ImageSet
from listing_editor.models.product_form import ProductForm
from listing_editor.services.errors import ValidationError
from listing_editor.services.image_loader import (
    read_image_files,
    split_paths,
)
from listing_editor.services.load_sequencer import (
    LoadResult,
    LoadSequencer,
)
from listing_editor.services.submit_sequencer import (
    SubmitOutcome,
    SubmitSequencer,
)
from listing_editor.storage.previews import PreviewRegistry
from listing_editor.storage.remote_store import (
    DataStore,
    ObjectStore,
    SupabaseDataStore,
    SupabaseObjectStore,
)
from listing_editor.ui.widgets import (
    ConfirmScreen,
    LandingScreen,
    LocationPanel,
)

logger = logging.getLogger("listing_editor.ui")


def _slot_label(ref: ImageRef | None) -> Text:
    """Carousel slot caption: new uploads and stored images differ."""
    if ref is None:
        return Text("empty", style="dim")
    marker = "🆕" if ref.is_pending else "🖼"
    return Text(f"{marker} {ref.label[:18]}\n(remove)")


class ListingEditorApp(App[object]):
    """Edit form for one product: fields, photos and location."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+s", "submit", "Save"),
        Binding("[", "carousel_retreat", "Prev photo"),
        Binding("]", "carousel_advance", "Next photo"),
    ]

    def __init__(
        self,
        product_id: str,
        data_store: DataStore | None = None,
        object_store: ObjectStore | None = None,
    ) -> None:
        super().__init__()
        self.product_id = product_id
        self.settings = Settings()
        self.previews = PreviewRegistry()
        self.form = ProductForm(
            images=ImageSet(
                self.previews,
                page_size=self.settings.CAROUSEL_PAGE_SIZE,
            )
        )
        self.data_store: DataStore = data_store or SupabaseDataStore()
        self.object_store: ObjectStore = (
            object_store or SupabaseObjectStore()
        )
        self.loader = LoadSequencer(self.data_store, self.settings)
        self.submitter = SubmitSequencer(
            self.data_store, self.object_store, self.settings
        )
        self.load_result: LoadResult | None = None
        self.last_outcome: SubmitOutcome | None = None
        self._load_started = False
        self._submitting = False

    def compose(self) -> ComposeResult:
        """Build the widget tree for the edit screen."""
        page_size = self.settings.CAROUSEL_PAGE_SIZE
        slots = [
            Button("", id=f"slot_{i}", classes="slot")
            for i in range(page_size)
        ]

        yield Header()
        yield Container(
            Static("✏️ Edit my listing", id="title_bar"),
            Horizontal(
                Vertical(
                    Label("Title"),
                    Input(id="title"),
                    Label("Category"),
                    Select(
                        [(c, c) for c in self.settings.CATEGORIES],
                        prompt="Choose a category",
                        id="category",
                    ),
                    Label("Price"),
                    Input(placeholder="0", id="price"),
                    Label("Description"),
                    TextArea(id="contents"),
                    id="fields",
                ),
                Vertical(
                    Label("Photos"),
                    Horizontal(
                        Input(
                            placeholder="Image paths, comma separated",
                            id="image_paths",
                        ),
                        Button("Add", id="add_images_btn"),
                        id="image_intake",
                    ),
                    Horizontal(
                        Button("<", id="carousel_prev"),
                        *slots,
                        Button(">", id="carousel_next"),
                        id="carousel",
                    ),
                    Static("", id="image_count"),
                    Label("Preferred meeting place"),
                    Static("", id="address"),
                    LocationPanel(id="location"),
                    id="media",
                ),
                id="editor",
            ),
            Horizontal(
                Static("Ready", id="status"),
                Button("Save changes", variant="primary", id="submit_btn"),
                id="actions",
            ),
            id="main_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        """Render the empty carousel, then load the product once."""
        self.render_carousel()
        await self.load_product()

    # ── Loading ──────────────────────────────────────────

    async def load_product(self) -> None:
        """Run the load sequence for this activation."""
        if self._load_started:
            return
        self._load_started = True

        status = self.query_one("#status", Static)
        status.update(f"🔍 Loading product {self.product_id}...")
        self.load_result = await self.loader.load(
            self.product_id, self.form
        )
        self.sync_widgets_from_form()

        if self.load_result.failed:
            status.update("⚠️ Product loaded with errors (see log)")
        else:
            status.update("Ready")

    def sync_widgets_from_form(self) -> None:
        """Push the form's values into the input widgets."""
        self.query_one("#title", Input).value = self.form.title
        self.query_one("#price", Input).value = self.form.price
        category = self.query_one("#category", Select)
        if self.form.category in self.settings.CATEGORIES:
            category.value = self.form.category
        else:
            category.clear()
        self.query_one("#contents", TextArea).load_text(
            self.form.description
        )
        self.query_one("#address", Static).update(
            self.form.geo.address or "No location selected"
        )
        self.query_one("#location", LocationPanel).show_point(
            self.form.geo.point
        )
        self.render_carousel()

    # ── Form field events ────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "title":
            self.form.title = event.value
        elif event.input.id == "price":
            self.form.price = event.value

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "category":
            value = event.value
            self.form.category = value if isinstance(value, str) else ""

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "contents":
            self.form.description = event.text_area.text

    def on_location_panel_marker_moved(
        self, event: LocationPanel.MarkerMoved
    ) -> None:
        """Take coordinates and address from the map in one step."""
        self.form.geo.set_from_map_event(event.point)
        self.query_one("#address", Static).update(
            event.point.address or "No location selected"
        )

    # ── Buttons ──────────────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id or ""
        if button_id == "add_images_btn":
            await self.add_images()
        elif button_id == "carousel_prev":
            self.action_carousel_retreat()
        elif button_id == "carousel_next":
            self.action_carousel_advance()
        elif button_id.startswith("slot_"):
            self.remove_visible_image(int(button_id.removeprefix("slot_")))
        elif button_id == "submit_btn":
            self.action_submit()

    # ── Images ───────────────────────────────────────────

    async def add_images(self) -> None:
        """Read the typed file paths and append them as new photos."""
        paths_input = self.query_one("#image_paths", Input)
        paths = split_paths(paths_input.value)
        if not paths:
            self.notify("Enter at least one image path", severity="warning")
            return

        intake = await read_image_files(paths, self.previews)
        self.form.images.append(intake.accepted)
        if intake.skipped:
            self.notify(
                f"Skipped: {', '.join(intake.skipped)}", severity="warning"
            )
        paths_input.value = ""
        self.render_carousel()

    def remove_visible_image(self, slot: int) -> None:
        """Remove the photo shown in carousel *slot*."""
        removed = self.form.images.remove_at(self.form.images.offset + slot)
        if removed is not None:
            self.render_carousel()

    def action_carousel_advance(self) -> None:
        if self.form.images.advance():
            self.render_carousel()

    def action_carousel_retreat(self) -> None:
        if self.form.images.retreat():
            self.render_carousel()

    def render_carousel(self) -> None:
        """Refresh slot captions and the visibility of the arrows."""
        images = self.form.images
        for i, ref in enumerate(images.visible()):
            slot = self.query_one(f"#slot_{i}", Button)
            slot.label = _slot_label(ref)
            slot.disabled = ref is None
        self.query_one("#carousel_prev", Button).display = (
            images.can_retreat()
        )
        self.query_one("#carousel_next", Button).display = (
            images.can_advance()
        )
        self.query_one("#image_count", Static).update(
            f"{len(images)} photo(s)"
        )

    # ── Submit ───────────────────────────────────────────

    def action_submit(self) -> None:
        """Validate locally, then ask for confirmation before saving."""
        if self._submitting:
            return
        try:
            self.submitter.validate(self.form, self.load_result)
        except ValidationError as exc:
            self.notify(str(exc), severity="warning")
            return
        self.push_screen(
            ConfirmScreen("Finish editing this listing?"),
            self._on_confirm,
        )

    async def _on_confirm(self, confirmed: bool | None) -> None:
        status = self.query_one("#status", Static)
        if not confirmed:
            logger.info("Edit of %s cancelled by user", self.product_id)
            status.update("Save cancelled")
            return

        submit_btn = self.query_one("#submit_btn", Button)
        self._submitting = True
        submit_btn.disabled = True
        status.update("💾 Saving...")
        try:
            outcome = await self.submitter.submit(
                self.product_id, self.form, self.load_result
            )
        finally:
            self._submitting = False
            submit_btn.disabled = False
        self.last_outcome = outcome

        if not outcome.ok:
            status.update(f"❌ Save failed at step '{outcome.failed_step}'")
            self.notify(f"Save failed: {outcome.error}", severity="error")
            return

        status.update("✅ Saved")
        self.sync_widgets_from_form()
        self.push_screen(LandingScreen(self.product_id))
