"""
Unit tests for the picker host driver.

Uses a mocked Playwright page, so no browser is needed:
- Message validation happens before the page is touched
- Installation evaluates the picker script
- Page errors are mapped to InvalidArgumentError / PickerBusyError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from browser_tools.errors import InvalidArgumentError, PickerBusyError
from browser_tools.picker import (
    CancelledSelection,
    MultipleSelection,
    SingleSelection,
    install_picker,
    is_picker_active,
    run_picker,
    validate_message,
)
from browser_tools.picker.script import (
    ACTIVE_EXPRESSION,
    PICK_EXPRESSION,
    PICKER_GLOBAL,
    PICKER_NODE_ATTRIBUTE,
    PICKER_SCRIPT,
)

BUTTON_RAW = {
    "tag": "button",
    "id": "test-btn",
    "class": "btn",
    "text": "Click me",
    "html": "<button>Click me</button>",
    "parents": "div > form",
}


def make_page(*results):
    """Mock page whose evaluate returns the given results in order."""
    page = MagicMock()
    page.url = "https://example.com/"
    page.evaluate = AsyncMock(side_effect=list(results))
    return page


class TestPickerScript:
    """Sanity checks on the injected program."""

    def test_script_guards_against_double_install(self):
        """The script installs only if the global is absent."""
        assert f"if (window.{PICKER_GLOBAL})" in PICKER_SCRIPT
        assert "Object.defineProperty(window" in PICKER_SCRIPT

    def test_script_uses_capture_listeners(self):
        """All three listeners are attached and detached in capture phase."""
        for event in ("mousemove", "click", "keydown"):
            assert f'document.addEventListener("{event}", ' in PICKER_SCRIPT
            assert f'document.removeEventListener("{event}", ' in PICKER_SCRIPT
        assert PICKER_SCRIPT.count(", true);") == 6

    def test_script_tags_its_nodes(self):
        """Every node the picker adds carries the marker attribute."""
        assert PICKER_NODE_ATTRIBUTE in PICKER_SCRIPT
        for role in ("overlay", "highlight", "banner"):
            assert f'setAttribute(NODE_ATTR, "{role}")' in PICKER_SCRIPT

    def test_script_formatting_is_complete(self):
        """No leftover %-placeholders in the rendered script."""
        assert "%(" not in PICKER_SCRIPT
        assert "100%;" in PICKER_SCRIPT

    def test_expressions_reference_global(self):
        assert PICKER_GLOBAL in PICK_EXPRESSION
        assert PICKER_GLOBAL in ACTIVE_EXPRESSION


class TestValidateMessage:
    """Test prompt validation."""

    def test_valid_message(self):
        assert validate_message("Select a button") == "Select a button"

    @pytest.mark.parametrize("message", ["", None, 42])
    def test_invalid_message(self, message):
        with pytest.raises(InvalidArgumentError):
            validate_message(message)


class TestInstallPicker:
    """Test idempotent installation."""

    @pytest.mark.asyncio
    async def test_install_evaluates_script(self):
        page = make_page(True)

        assert await install_picker(page) is True
        page.evaluate.assert_awaited_once_with(PICKER_SCRIPT)

    @pytest.mark.asyncio
    async def test_install_reports_existing(self):
        page = make_page(False)
        assert await install_picker(page) is False

    @pytest.mark.asyncio
    async def test_install_propagates_errors(self):
        page = make_page(PlaywrightError("Evaluate failed"))
        with pytest.raises(PlaywrightError, match="Evaluate failed"):
            await install_picker(page)

    @pytest.mark.asyncio
    async def test_is_picker_active(self):
        page = make_page(True)
        assert await is_picker_active(page) is True
        page.evaluate.assert_awaited_once_with(ACTIVE_EXPRESSION)


class TestRunPicker:
    """Test run_picker with a mocked page."""

    @pytest.mark.asyncio
    async def test_single_selection(self):
        """Installs the picker, then calls pick with the message."""
        page = make_page(True, BUTTON_RAW)

        selection = await run_picker(page, "Select a button")

        assert isinstance(selection, SingleSelection)
        assert selection.element.id == "test-btn"
        assert page.evaluate.await_count == 2
        assert page.evaluate.await_args_list[0].args == (PICKER_SCRIPT,)
        assert page.evaluate.await_args_list[1].args == (PICK_EXPRESSION, "Select a button")

    @pytest.mark.asyncio
    async def test_cancelled(self):
        page = make_page(False, None)
        selection = await run_picker(page, "Select something")
        assert isinstance(selection, CancelledSelection)

    @pytest.mark.asyncio
    async def test_multiple(self):
        links = [
            {"tag": "a", "id": None, "class": "link", "text": "Link 1", "html": "<a>Link 1</a>", "parents": ""},
            {"tag": "a", "id": None, "class": "link", "text": "Link 2", "html": "<a>Link 2</a>", "parents": ""},
        ]
        page = make_page(True, links)

        selection = await run_picker(page, "Select links")

        assert isinstance(selection, MultipleSelection)
        assert [e.text for e in selection.elements] == ["Link 1", "Link 2"]

    @pytest.mark.asyncio
    async def test_empty_message_never_touches_page(self):
        """InvalidArgument is raised before any evaluation."""
        page = make_page()

        with pytest.raises(InvalidArgumentError):
            await run_picker(page, "")

        page.evaluate.assert_not_called()

    @pytest.mark.asyncio
    async def test_page_invalid_argument_is_mapped(self):
        page = make_page(
            True,
            PlaywrightError("Error: InvalidArgument: pick() requires a non-empty message"),
        )
        with pytest.raises(InvalidArgumentError):
            await run_picker(page, "x")

    @pytest.mark.asyncio
    async def test_busy_is_mapped(self):
        page = make_page(
            False,
            PlaywrightError("Error: PickerBusy: a picker session is already active on this page"),
        )
        with pytest.raises(PickerBusyError) as exc_info:
            await run_picker(page, "Select again")
        assert exc_info.value.hint

    @pytest.mark.asyncio
    async def test_other_page_errors_propagate(self):
        """Navigation during a session is not specially handled."""
        page = make_page(
            True,
            PlaywrightError("Execution context was destroyed, most likely because of a navigation"),
        )
        with pytest.raises(PlaywrightError, match="Execution context was destroyed"):
            await run_picker(page, "Select")

    @pytest.mark.asyncio
    async def test_api_name_prefix_is_mapped(self):
        page = make_page(
            False,
            PlaywrightError(
                "Page.evaluate: Error: PickerBusy: a picker session is already active on this page\n"
                "    at Object.pick (<anonymous>:52:28)"
            ),
        )
        with pytest.raises(PickerBusyError):
            await run_picker(page, "Select again")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "message",
        [
            "Error: TypeError: PickerBusy: is not a function",
            "Error: page script says InvalidArgument: nope",
            "Error: boom\n    at PickerBusy: (<anonymous>:1:1)",
        ],
    )
    async def test_codes_only_match_at_the_start(self, message):
        """A page exception that merely mentions a code is not remapped."""
        page = make_page(True, PlaywrightError(message))
        with pytest.raises(PlaywrightError):
            await run_picker(page, "Select")
