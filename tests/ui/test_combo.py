"""Tests for the FilteredComboBox widget."""

import pytest
from textual.app import App, ComposeResult
from textual.widgets import Input, OptionList

from tuimisc.model.items import ItemList
from tuimisc.ui.combo import FilteredComboBox

NAMES = ["Alice", "Bob", "Carol"]
DELAY = 500
SETTLE = 1.0


class ComboApp(App):
    """Minimal app for testing FilteredComboBox."""

    def __init__(self, items=None, **kwargs):
        super().__init__()
        self._items = list(NAMES) if items is None else items
        self._kwargs = {"delay": DELAY, **kwargs}
        self.selections = []
        self.submitted = []
        self.cancelled = False

    def compose(self) -> ComposeResult:
        yield FilteredComboBox(self._items, **self._kwargs)
        yield Input(id="other")

    def on_filtered_combo_box_selection_changed(self, event: FilteredComboBox.SelectionChanged) -> None:
        self.selections.append(event.item)

    def on_filtered_combo_box_submitted(self, event: FilteredComboBox.Submitted) -> None:
        self.submitted.append((event.item, event.text))

    def on_filtered_combo_box_cancelled(self, event: FilteredComboBox.Cancelled) -> None:
        self.cancelled = True


class SharedApp(App):
    """Two combo boxes over one ItemList."""

    def __init__(self):
        super().__init__()
        self.items = ItemList(NAMES)

    def compose(self) -> ComposeResult:
        yield FilteredComboBox(self.items, delay=DELAY, id="first")
        yield FilteredComboBox(self.items, delay=DELAY, id="second")


@pytest.fixture
def app():
    return ComboApp()


def _combo(app: App, selector: str = "FilteredComboBox") -> FilteredComboBox:
    return app.query_one(selector, FilteredComboBox)


def _option_list(app: App, selector: str = "FilteredComboBox") -> OptionList:
    return _combo(app, selector).query_one(OptionList)


def _input(app: App, selector: str = "FilteredComboBox") -> Input:
    return _combo(app, selector).query_one(Input)


@pytest.mark.asyncio
async def test_initial_state(app):
    """All items listed, dropdown hidden, nothing selected."""
    async with app.run_test():
        assert _input(app).value == ""
        assert _option_list(app).option_count == 3
        assert not _option_list(app).has_class("-visible")
        assert _combo(app).selected_item is None


@pytest.mark.asyncio
async def test_typing_filters_after_delay(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        await pilot.pause(SETTLE)
        ol = _option_list(app)
        assert ol.option_count == 2  # Alice, Carol
        assert ol.has_class("-visible")
        assert _combo(app).selected_item is None


@pytest.mark.asyncio
async def test_no_filtering_before_delay():
    app = ComboApp(delay=5000)
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        assert _option_list(app).option_count == 3
        assert not _option_list(app).has_class("-visible")
        assert _combo(app).controller.filtering_pending


@pytest.mark.asyncio
async def test_single_match_is_selected(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a", "l")
        await pilot.pause(SETTLE)
        combo = _combo(app)
        assert combo.selected_item == "Alice"
        assert _input(app).value == "Alice"
        assert not _option_list(app).has_class("-visible")
        # Dropdown closed, so the filter is gone
        assert _option_list(app).option_count == 3
        assert not combo.controller.filtering_pending
        assert app.selections == ["Alice"]


@pytest.mark.asyncio
async def test_accent_insensitive_filtering():
    app = ComboApp(items=["Chloé", "Zoë", "Bob"])
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("z", "o", "e")
        await pilot.pause(SETTLE)
        assert _combo(app).selected_item == "Zoë"


@pytest.mark.asyncio
async def test_down_selects_first_item(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("down")
        ol = _option_list(app)
        assert ol.has_class("-visible")
        assert _combo(app).selected_item == "Alice"
        assert _input(app).value == "Alice"
        assert ol.highlighted == 0


@pytest.mark.asyncio
async def test_up_selects_last_item(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("up")
        assert _combo(app).selected_item == "Carol"


@pytest.mark.asyncio
async def test_arrows_move_selection(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("down", "down")
        assert _combo(app).selected_item == "Bob"
        assert _option_list(app).highlighted == 1
        await pilot.pause(SETTLE)
        # Selecting wrote the text without scheduling a filter pass
        assert _option_list(app).option_count == 3


@pytest.mark.asyncio
async def test_enter_submits_selection(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("down", "down", "enter")
        assert app.submitted == [("Bob", "Bob")]
        assert not _option_list(app).has_class("-visible")


@pytest.mark.asyncio
async def test_enter_cancels_pending_filter():
    app = ComboApp(delay=300)
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("b")
        await pilot.pause()
        assert _combo(app).controller.filtering_pending
        await pilot.press("enter")
        await pilot.pause(0.6)
        assert app.submitted == [(None, "b")]
        assert _combo(app).selected_item is None
        assert not _option_list(app).has_class("-visible")
        assert _option_list(app).option_count == 3


@pytest.mark.asyncio
async def test_escape_closes_dropdown(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        await pilot.pause(SETTLE)
        assert _option_list(app).has_class("-visible")
        await pilot.press("escape")
        assert not _option_list(app).has_class("-visible")
        assert _option_list(app).option_count == 3
        assert not app.cancelled


@pytest.mark.asyncio
async def test_escape_with_dropdown_closed_cancels(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("escape")
        assert app.cancelled


@pytest.mark.asyncio
async def test_option_click_selects_and_closes(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        await pilot.pause(SETTLE)
        ol = _option_list(app)
        ol.highlighted = 1
        ol.action_select()
        await pilot.pause()
        assert _combo(app).selected_item == "Carol"
        assert _input(app).value == "Carol"
        assert not ol.has_class("-visible")
        assert ol.option_count == 3


@pytest.mark.asyncio
async def test_blur_closes_dropdown(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        await pilot.pause(SETTLE)
        assert _option_list(app).has_class("-visible")
        app.query_one("#other", Input).focus()
        await pilot.pause()
        await pilot.pause()
        assert not _option_list(app).has_class("-visible")
        assert _option_list(app).option_count == 3


@pytest.mark.asyncio
async def test_item_list_changes_update_dropdown():
    items = ItemList(NAMES)
    app = ComboApp(items=items)
    async with app.run_test() as pilot:
        items.append("Dave")
        await pilot.pause()
        assert _option_list(app).option_count == 4
        items.remove("Bob")
        await pilot.pause()
        assert _option_list(app).option_count == 3


@pytest.mark.asyncio
async def test_shared_items_filter_independently():
    app = SharedApp()
    async with app.run_test() as pilot:
        _input(app, "#first").focus()
        await pilot.press("a")
        await pilot.pause(SETTLE)
        assert _option_list(app, "#first").option_count == 2
        assert _option_list(app, "#second").option_count == 3
        assert len(_combo(app, "#second").view) == 3


@pytest.mark.asyncio
async def test_unmount_clears_filter(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        await pilot.pause(SETTLE)
        combo = _combo(app)
        view = combo.view
        await pilot.press("l")
        await combo.remove()
        await pilot.pause(SETTLE)
        assert view.filter is None
        assert len(view) == 3
        assert app.selections == []


@pytest.mark.asyncio
async def test_display_member_path():
    people = [{"name": "Alice", "id": 1}, {"name": "Bob", "id": 2}]
    app = ComboApp(items=people, display_member_path="name")
    async with app.run_test() as pilot:
        ol = _option_list(app)
        assert str(ol.get_option_at_index(1).prompt) == "Bob"
        _input(app).focus()
        await pilot.press("b")
        await pilot.pause(SETTLE)
        assert _combo(app).selected_item is people[1]
        assert _input(app).value == "Bob"


@pytest.mark.asyncio
async def test_rebinding_items(app):
    async with app.run_test() as pilot:
        combo = _combo(app)
        combo.items = ["Xavier", "Yolanda"]
        await pilot.pause()
        assert _option_list(app).option_count == 2
        assert combo.selected_item is None


@pytest.mark.asyncio
async def test_placeholder_and_initial_value():
    app = ComboApp(placeholder="Pick one", value="Bo")
    async with app.run_test():
        assert _input(app).placeholder == "Pick one"
        assert _input(app).value == "Bo"
