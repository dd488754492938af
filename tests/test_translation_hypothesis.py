"""Property-based tests for canonical key resolution."""

from __future__ import annotations

from typing import Any

from hypothesis import event, given
from hypothesis import strategies as st

from tests.strategies.locale_trees import (
    locale_trees,
    message_keys,
    message_text,
    nest,
    templates,
)
from universal_i18n.translation import interpolate, resolve


class TestResolutionProperties:
    """Totality and determinism of resolve()."""

    @given(tree=locale_trees(), key=message_keys())
    def test_idempotent(self, tree: dict[str, Any], key: str) -> None:
        messages = {"en": tree, "ko": tree}
        first = resolve(messages, "en", "ko", key)
        second = resolve(messages, "en", "ko", key)
        assert first == second

    @given(key=message_keys(), value=message_text, active=locale_trees())
    def test_fallback_value_returned_when_active_lacks_key(
        self, key: str, value: str, active: dict[str, Any]
    ) -> None:
        # "~" never appears in generated segments, so the active tree cannot hold the key.
        missing_key = f"~{key}"
        messages = {"en": active, "ko": nest(missing_key, value)}
        assert resolve(messages, "en", "ko", missing_key) == value

    @given(key=message_keys(), active=locale_trees(), fallback=locale_trees())
    def test_key_absent_everywhere_returns_key(
        self, key: str, active: dict[str, Any], fallback: dict[str, Any]
    ) -> None:
        missing_key = f"~{key}"
        messages = {"en": active, "ko": fallback}
        assert resolve(messages, "en", "ko", missing_key) == missing_key

    @given(key=message_keys(), mine=message_text, theirs=message_text)
    def test_active_locale_wins_over_fallback(self, key: str, mine: str, theirs: str) -> None:
        messages = {"en": nest(key, mine), "ko": nest(key, theirs)}
        assert resolve(messages, "en", "ko", key) == mine

    @given(tree=locale_trees(), key=message_keys())
    def test_result_is_always_string(self, tree: dict[str, Any], key: str) -> None:
        result = resolve({"en": tree}, "en", "ko", key)
        event(f"hit={result != key}")
        assert isinstance(result, str)


class TestInterpolationProperties:
    """Placeholder substitution properties."""

    @given(data=templates())
    def test_empty_params_is_identity(self, data: tuple[str, list[str]]) -> None:
        template, _ = data
        assert interpolate(template, {}) == template

    @given(data=templates(), value=message_text)
    def test_all_placeholders_substituted(self, data: tuple[str, list[str]], value: str) -> None:
        template, names = data
        result = interpolate(template, dict.fromkeys(names, value))
        for name in names:
            assert f"{{{name}}}" not in result

    @given(data=templates(), params=st.dictionaries(st.just("~unused"), message_text))
    def test_unrelated_params_leave_template_unchanged(
        self, data: tuple[str, list[str]], params: dict[str, str]
    ) -> None:
        template, _ = data
        assert interpolate(template, params) == template
