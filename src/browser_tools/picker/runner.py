"""
Picker host driver.

Installs the picker program into a page and runs one selection session:

    from browser_tools.picker import run_picker

    selection = await run_picker(page, "Click the submit button")
    for element in selection.elements:
        print(element.tag, element.parents)

There is no timeout: the call waits until the user clicks, presses Enter or
presses Escape. Navigating away or closing the tab destroys the session and
the Playwright error propagates to the caller.
"""

import logging
import re
from typing import Any, Optional

from playwright.async_api import Error as PlaywrightError, Page

from ..errors import InvalidArgumentError, PickerBusyError
from .models import SelectionResult, parse_selection
from .script import (
    ACTIVE_EXPRESSION,
    INVALID_ARGUMENT_PREFIX,
    PICK_EXPRESSION,
    PICKER_BUSY_PREFIX,
    PICKER_SCRIPT,
)

logger = logging.getLogger(__name__)

# First line of a rejected evaluate: optional "Page.evaluate: " then "Error: <code>: ..."
_PAGE_ERROR_RE = re.compile(r"^(?:[\w.]+: )?Error: (\w+): ")


def page_error_code(error: PlaywrightError) -> Optional[str]:
    """Return the picker error code a page rejection starts with, if any."""
    lines = (error.message or "").splitlines()
    match = _PAGE_ERROR_RE.match(lines[0]) if lines else None
    return match.group(1) if match else None


def validate_message(message: Any) -> str:
    """
    Check the prompt message before anything touches the page.

    Raises:
        InvalidArgumentError: If message is missing, not a string, or empty
    """
    if not isinstance(message, str) or not message:
        raise InvalidArgumentError(
            "pick() requires a non-empty message",
            hint='Example: browser-pick "Click the submit button"',
        )
    return message


async def install_picker(page: Page) -> bool:
    """
    Install the picker program on a page if it is not there yet.

    Args:
        page: Playwright Page instance

    Returns:
        True if the picker was installed, False if it was already present
    """
    installed = bool(await page.evaluate(PICKER_SCRIPT))
    if installed:
        logger.debug("Installed picker on %s", page.url)
    else:
        logger.debug("Picker already present on %s", page.url)
    return installed


async def is_picker_active(page: Page) -> bool:
    """Check whether a picker session is currently listening on the page."""
    return bool(await page.evaluate(ACTIVE_EXPRESSION))


async def run_picker(page: Page, message: str) -> SelectionResult:
    """
    Run one interactive picker session.

    Args:
        page: Playwright Page instance
        message: Prompt shown in the picker banner

    Returns:
        SingleSelection, MultipleSelection or CancelledSelection

    Raises:
        InvalidArgumentError: If message is empty (the page is not touched)
        PickerBusyError: If another session is already listening on the page
    """
    message = validate_message(message)

    await install_picker(page)

    logger.info("Waiting for element selection: %s", message)
    try:
        raw = await page.evaluate(PICK_EXPRESSION, message)
    except PlaywrightError as e:
        code = page_error_code(e)
        if code == INVALID_ARGUMENT_PREFIX:
            raise InvalidArgumentError(
                "pick() requires a non-empty message"
            ) from e
        if code == PICKER_BUSY_PREFIX:
            raise PickerBusyError(
                "A picker session is already active on this page",
                hint="Finish or cancel (Esc) the running selection first",
            ) from e
        raise

    selection = parse_selection(raw)
    logger.info(
        "Picker finished: %s (%d element(s))",
        selection.kind.value,
        len(selection.elements),
    )
    return selection
