"""File pattern classification.

Assigns a file to at most one structural pattern from its path and text.
First matching rule wins. Test and generated come first so those files are
always exempt, whatever else they look like.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from .models import Pattern

Predicate = Callable[[str, str], bool]

# Path conventions
TEST_PATH_RE = re.compile(r"\.(test|spec)\.(ts|tsx|js|jsx)$")
GENERATED_PATH_RE = re.compile(r"\.generated\.(ts|tsx)$")
TYPES_PATH_RE = re.compile(r"types?\.(ts|d\.ts)$")
CONTROLLER_PATH_RE = re.compile(r"Controller\.(ts|tsx)$")
STORE_PATH_RE = re.compile(r"(Store|Repository)\.(ts|tsx)$")
ROUTES_PATH_RE = re.compile(r"routes?\.(ts|tsx)$")
LIFECYCLE_PATH_RE = re.compile(r"Lifecycle\.(ts|tsx)$")
MIDDLEWARE_PATH_RE = re.compile(r"middleware", re.IGNORECASE)
COMPONENT_PATH_RE = re.compile(r"\.(tsx|jsx)$")
UTILITY_PATH_RE = re.compile(r"(utils?|helpers?|lib)\.(ts|js)$")

# Content shapes
EXPORTED_TYPE_RE = re.compile(r"^export (type|interface)", re.MULTILINE)

# More exported type/interface declarations than this makes a types module
TYPE_DECLARATION_LIMIT = 10


def _is_test(path: str, content: str) -> bool:
    return TEST_PATH_RE.search(path) is not None


def _is_generated(path: str, content: str) -> bool:
    return GENERATED_PATH_RE.search(path) is not None


def _is_type_definitions(path: str, content: str) -> bool:
    if TYPES_PATH_RE.search(path):
        return True
    return len(EXPORTED_TYPE_RE.findall(content)) > TYPE_DECLARATION_LIMIT


def _is_controller(path: str, content: str) -> bool:
    if CONTROLLER_PATH_RE.search(path):
        return True
    return "reconcile" in content and "class" in content


def _is_data_store(path: str, content: str) -> bool:
    return STORE_PATH_RE.search(path) is not None


def _is_route_table(path: str, content: str) -> bool:
    if ROUTES_PATH_RE.search(path):
        return True
    return "router." in content and "app." in content


def _is_state_machine(path: str, content: str) -> bool:
    if LIFECYCLE_PATH_RE.search(path):
        return True
    return "transition" in content and "state" in content


def _is_middleware(path: str, content: str) -> bool:
    return MIDDLEWARE_PATH_RE.search(path) is not None


def _is_ui_component(path: str, content: str) -> bool:
    if not COMPONENT_PATH_RE.search(path):
        return False
    return "export" in content and ("function" in content or "const" in content)


def _is_utility(path: str, content: str) -> bool:
    return UTILITY_PATH_RE.search(path) is not None


# Ordered: evaluation stops at the first predicate that matches.
PATTERN_RULES: tuple[tuple[Pattern, Predicate], ...] = (
    (Pattern.TEST, _is_test),
    (Pattern.GENERATED, _is_generated),
    (Pattern.TYPE_DEFINITIONS, _is_type_definitions),
    (Pattern.CONTROLLER, _is_controller),
    (Pattern.DATA_STORE, _is_data_store),
    (Pattern.ROUTE_TABLE, _is_route_table),
    (Pattern.STATE_MACHINE, _is_state_machine),
    (Pattern.MIDDLEWARE, _is_middleware),
    (Pattern.UI_COMPONENT, _is_ui_component),
    (Pattern.UTILITY, _is_utility),
)


def classify(path: str, content: str) -> Optional[Pattern]:
    """Classify a file into a structural pattern.

    Args:
        path: Repository-relative path (forward or back slashes both work)
        content: Full file text

    Returns:
        The first matching Pattern, or None when no rule matches
    """
    for pattern, matches in PATTERN_RULES:
        if matches(path, content):
            return pattern
    return None
