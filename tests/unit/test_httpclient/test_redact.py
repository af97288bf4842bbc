"""Unit tests for param and body redaction."""

import copy
from concurrent.futures import ThreadPoolExecutor

import pytest

from http_redact.httpclient.constants import REDACTED_VALUE
from http_redact.httpclient.errors import BodyRedactionError
from http_redact.httpclient.redact import (
    make_body_redactor,
    make_redactor,
    to_field_set,
)


class TestToFieldSet:
    """Tests for the field-set index."""

    def test_membership(self) -> None:
        """Configured names are members, others are not."""
        field_set = to_field_set(["Authorization", "X-Api-Key"])

        assert "Authorization" in field_set
        assert "X-Api-Key" in field_set
        assert "Accept" not in field_set

    def test_duplicates_are_harmless(self) -> None:
        """Duplicated names collapse into one member."""
        field_set = to_field_set(["token", "token", "id"])

        assert field_set == frozenset({"token", "id"})

    def test_empty(self) -> None:
        """No names give an empty set."""
        assert to_field_set([]) == frozenset()


class TestMakeRedactor:
    """Tests for multi-value map redaction."""

    def test_redacts_configured_keys(self) -> None:
        """Configured keys map to the marker regardless of value."""
        redact = make_redactor(to_field_set(["Authorization"]))

        result = redact({"Authorization": ["Bearer abc", "Bearer def"]})

        assert result == {"Authorization": REDACTED_VALUE}

    def test_joins_other_values_in_order(self) -> None:
        """Other keys keep their values, comma-joined in order."""
        redact = make_redactor(to_field_set(["token"]))

        result = redact({"page": ["2", "1", "3"], "q": ["term"]})

        assert result == {"page": "2,1,3", "q": "term"}

    def test_end_to_end_headers(self) -> None:
        """Authorization is masked while Accept passes through."""
        redact = make_redactor(to_field_set(["Authorization"]))

        result = redact({"Authorization": ["Bearer abc"], "Accept": ["json"]})

        assert result == {"Authorization": "XXX", "Accept": "json"}

    def test_match_is_case_sensitive(self) -> None:
        """Names are compared exactly as configured."""
        redact = make_redactor(to_field_set(["Authorization"]))

        result = redact({"authorization": ["Bearer abc"]})

        assert result == {"authorization": "Bearer abc"}

    def test_absent_keys_are_not_defaulted(self) -> None:
        """Configured keys missing from the input are not added."""
        redact = make_redactor(to_field_set(["Authorization", "Cookie"]))

        result = redact({"Accept": ["json"]})

        assert result == {"Accept": "json"}

    def test_empty_values_join_to_empty_string(self) -> None:
        """A key without values maps to an empty string."""
        redact = make_redactor(frozenset())

        assert redact({"X-Empty": []}) == {"X-Empty": ""}

    def test_idempotent(self) -> None:
        """Redacting the output again yields the same output."""
        redact = make_redactor(to_field_set(["token"]))
        once = redact({"token": ["secret"], "page": ["1", "2"]})

        twice = redact({key: [value] for key, value in once.items()})

        assert twice == once

    def test_does_not_mutate_input(self) -> None:
        """The input map is left untouched."""
        redact = make_redactor(to_field_set(["token"]))
        params = {"token": ["secret"]}

        redact(params)

        assert params == {"token": ["secret"]}


class TestMakeBodyRedactor:
    """Tests for nested body redaction."""

    def test_none_is_passed_through(self) -> None:
        """An absent body stays absent."""
        redact = make_body_redactor(["token"])

        assert redact(None) is None

    def test_selective_mutation(self) -> None:
        """Only the selected locations change."""
        body = {
            "user": {"ssn": "123-45-6789", "name": "Ann", "age": 41},
            "token": "abc",
            "meta": {"token": "keep"},
        }
        expected = copy.deepcopy(body)
        expected["user"]["ssn"] = REDACTED_VALUE
        expected["token"] = REDACTED_VALUE
        redact = make_body_redactor(["user.ssn", "token"])

        result = redact(body)

        assert result == expected

    def test_mutates_in_place(self) -> None:
        """The working copy itself is returned and modified."""
        body = {"token": "abc"}
        redact = make_body_redactor(["token"])

        result = redact(body)

        assert result is body
        assert body["token"] == REDACTED_VALUE

    def test_missing_selector_is_noop(self) -> None:
        """A selector that does not resolve changes nothing."""
        body = {"does": {"exist": 1}, "other": [1, 2]}
        redact = make_body_redactor(["does.not.exist", "nope", "other.7"])

        result = redact(copy.deepcopy(body))

        assert result == body

    def test_selector_through_scalar_is_noop(self) -> None:
        """Walking past a scalar does not fail."""
        redact = make_body_redactor(["name.first"])

        assert redact({"name": "Ann"}) == {"name": "Ann"}

    def test_redacts_whole_subtree(self) -> None:
        """Selecting a nested object replaces it entirely."""
        redact = make_body_redactor(["card"])

        result = redact({"card": {"number": "4111", "cvv": "123"}, "id": 1})

        assert result == {"card": REDACTED_VALUE, "id": 1}

    def test_fans_out_over_lists(self) -> None:
        """A non-numeric segment applies to every list element."""
        body = {"users": [{"ssn": "1", "name": "a"}, {"ssn": "2", "name": "b"}]}
        redact = make_body_redactor(["users.ssn"])

        result = redact(body)

        assert result == {
            "users": [
                {"ssn": REDACTED_VALUE, "name": "a"},
                {"ssn": REDACTED_VALUE, "name": "b"},
            ]
        }

    def test_numeric_segment_indexes_list(self) -> None:
        """A numeric segment selects a single element."""
        body = {"users": [{"ssn": "1"}, {"ssn": "2"}], "codes": ["a", "b"]}
        redact = make_body_redactor(["users.1.ssn", "codes.0"])

        result = redact(body)

        assert result == {
            "users": [{"ssn": "1"}, {"ssn": REDACTED_VALUE}],
            "codes": [REDACTED_VALUE, "b"],
        }

    def test_fan_out_skips_non_objects(self) -> None:
        """List elements that cannot hold the field are ignored."""
        body = {"items": [{"secret": "x"}, "plain", 3, None]}
        redact = make_body_redactor(["items.secret"])

        result = redact(body)

        assert result == {"items": [{"secret": REDACTED_VALUE}, "plain", 3, None]}

    def test_literal_dotted_key(self) -> None:
        """A key containing dots is matched verbatim."""
        redact = make_body_redactor(["user.ssn"])

        result = redact({"user.ssn": "123", "user": {"name": "Ann"}})

        assert result == {"user.ssn": REDACTED_VALUE, "user": {"name": "Ann"}}

    def test_null_value_is_redacted(self) -> None:
        """A present key is masked even when its value is null."""
        redact = make_body_redactor(["token"])

        assert redact({"token": None}) == {"token": REDACTED_VALUE}

    def test_empty_selectors_are_ignored(self) -> None:
        """Blank selectors do not match anything."""
        redact = make_body_redactor(["", "token"])

        assert redact({"": "kept", "token": "t"}) == {"": "kept", "token": "XXX"}

    def test_selectors_applied_in_order(self) -> None:
        """A later selector under an already-masked field is a no-op."""
        redact = make_body_redactor(["user", "user.ssn"])

        assert redact({"user": {"ssn": "1"}}) == {"user": REDACTED_VALUE}

    @pytest.mark.parametrize("body", [["a", "b"], "text", 42, True])
    def test_non_object_body_fails_loudly(self, body: object) -> None:
        """Bodies that are not JSON objects raise."""
        redact = make_body_redactor(["token"])

        with pytest.raises(BodyRedactionError):
            redact(body)

    def test_safe_for_concurrent_use(self) -> None:
        """One redactor serves many threads with independent bodies."""
        redact = make_body_redactor(["user.ssn"])
        bodies = [{"user": {"ssn": str(i), "id": i}} for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(redact, bodies))

        for i, result in enumerate(results):
            assert result == {"user": {"ssn": REDACTED_VALUE, "id": i}}

    @pytest.mark.parametrize("depth", [1, 800, 5000])
    def test_deeply_nested_lists(self, depth: int) -> None:
        """Fan-out through many list levels reaches the innermost object."""
        leaf = {"b": "secret", "c": "kept"}
        node: object = leaf
        for _ in range(depth):
            node = [node]

        make_body_redactor(["a.b"])({"a": node})

        assert leaf == {"b": REDACTED_VALUE, "c": "kept"}
