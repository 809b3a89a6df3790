"""
Script Evaluation Tool

Evaluates a JavaScript expression in the active tab and returns its value.
The expression runs inside an async function, so ``await`` works:

    browser-eval "document.title"
    browser-eval "await fetch('/api').then(r => r.status)"
"""

from playwright.async_api import Page

from .base import tool, ToolResult

# Wraps the user's code as ``return (<code>)`` in an AsyncFunction
EVALUATE_EXPRESSION = """(code) => {
    const AsyncFunction = (async () => {}).constructor;
    return new AsyncFunction(`return (${code})`)();
}"""


@tool(
    name="evaluate",
    description="Evaluate a JavaScript expression in the current page and return its JSON-serializable value. The expression may use await.",
    parameters={
        "type": "object",
        "properties": {
            "code": {
                "type": "string",
                "description": "JavaScript expression, e.g. \"document.querySelectorAll('a').length\"",
            },
        },
        "required": ["code"],
    },
)
async def evaluate(page: Page, code: str) -> ToolResult:
    """
    Evaluate a JavaScript expression in the page.

    Args:
        page: Playwright Page instance
        code: Expression to evaluate

    Returns:
        ToolResult whose data is the expression's value
    """
    if not code or not code.strip():
        return ToolResult.fail("evaluate() requires code")

    value = await page.evaluate(EVALUATE_EXPRESSION, code)
    return ToolResult.ok(value, url=page.url)
