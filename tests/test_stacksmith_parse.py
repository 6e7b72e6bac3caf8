"""Tests for Stacksmith response parsers."""

import json

import pytest

from catalog.models import EntityCategory, StackReference, VersionedEntity
from registry.stacksmith.parse import (
    parse_dependency_ids,
    parse_entities,
    parse_flavor_ids,
    parse_stack_reference,
)
from versioning.models import BranchedVersion

LARGE_JSON_ITEM_SIZE = 5000

GOOD_COMPONENTS_JSON = {
    "items": [
        {
            "id": "tomcat",
            "name": "Tomcat",
            "category": "service",
            "versions": [
                {"version": "2.0", "revision": 0, "branch": "stable",
                 "checksum": "0xdeadbeef", "published_at": "2015-11-20"},
                {"version": "1.0", "revision": 0, "branch": "stable",
                 "checksum": "0xbeefbeef", "published_at": "2015-11-10"},
            ],
        },
        {
            "id": "java",
            "name": "Java",
            "category": "runtime",
            "versions": [
                {"version": "3.0", "revision": 0, "branch": "dev",
                 "checksum": "0xdeadbeef", "published_at": "2015-11-20"},
            ],
        },
    ]
}

STABLE_1_0 = BranchedVersion("1.0", "stable")
STABLE_2_0 = BranchedVersion("2.0", "stable")
DEV_3_0 = BranchedVersion("3.0", "dev")
COMPONENT_TOMCAT = VersionedEntity("tomcat", "Tomcat", EntityCategory.COMPONENT, (STABLE_1_0, STABLE_2_0))
COMPONENT_JAVA = VersionedEntity("java", "Java", EntityCategory.COMPONENT, (DEV_3_0,))


class TestParseEntities:
    """Entity listing parsing."""

    def test_parses_correct_json(self):
        """Both items are parsed into equal entities, in entity order."""
        result = parse_entities(GOOD_COMPONENTS_JSON)
        assert result is not None
        assert len(result) == 2
        assert COMPONENT_TOMCAT in result
        assert COMPONENT_JAVA in result
        assert result == [COMPONENT_JAVA, COMPONENT_TOMCAT]

    def test_empty_items_gives_empty_list(self):
        """An empty listing is a result, not a failure."""
        assert parse_entities({"items": []}) == []

    @pytest.mark.parametrize(
        "data",
        [
            {"stuff": "This is valid JSON, but not in our format"},
            {"items": {}},
            {"items": ["tomcat"]},
            {"items": [{"id": "tomcat", "name": "Tomcat", "category": "service"}]},
            {"items": [{"id": "t", "name": "T", "category": "service", "versions": [{"version": "1.0"}]}]},
            {"items": [{"id": None, "name": "T", "category": "service", "versions": []}]},
            [],
            "items",
            None,
        ],
    )
    def test_rejects_bad_shapes(self, data):
        """Anything outside the expected shape yields None."""
        assert parse_entities(data) is None

    def test_one_bad_item_invalidates_all(self):
        """There are no partial results."""
        data = json.loads(json.dumps(GOOD_COMPONENTS_JSON))
        del data["items"][1]["name"]
        assert parse_entities(data) is None

    def test_unknown_category_is_kept(self):
        """Unrecognized categories parse as UNKNOWN."""
        data = {"items": [{"id": "pg", "name": "Postgres", "category": "database", "versions": []}]}
        result = parse_entities(data)
        assert result == [VersionedEntity("pg", "Postgres", EntityCategory.UNKNOWN)]

    def test_handles_very_large_json(self):
        """Thousands of distinct items are neither dropped nor merged."""
        items = []
        expected = set()
        for i in range(LARGE_JSON_ITEM_SIZE):
            items.append({
                "id": f"id{i}",
                "name": f"Name {i}",
                "category": "runtime",
                "versions": [{"version": "1.0", "revision": 0, "branch": "stable",
                              "checksum": "0xdeadbeef", "published_at": "2015-11-20"}],
            })
            expected.add(VersionedEntity(f"id{i}", f"Name {i}", EntityCategory.COMPONENT, (STABLE_1_0,)))

        result = parse_entities({"items": items})

        assert result is not None
        assert len(result) == LARGE_JSON_ITEM_SIZE
        assert set(result) == expected
        assert result == sorted(result)

    def test_very_long_version_numbers(self):
        """A huge numeric version section does not invalidate the listing."""
        huge = "1" * 5000
        data = {"items": [{"id": "tomcat", "name": "Tomcat", "category": "service",
                           "versions": [{"version": huge, "branch": "stable"},
                                        {"version": "2", "branch": "stable"}]}]}
        result = parse_entities(data)
        assert result is not None
        assert [v.version for v in result[0].versions] == ["2", huge]
        assert result[0].latest == BranchedVersion(huge, "stable")


class TestParseDependencyIds:
    """Dependency id parsing."""

    def test_parses_ids(self):
        """Bare string items are sorted and deduplicated."""
        data = {"total_entries": 3, "total_pages": 1, "items": ["java", "apache", "java"]}
        assert parse_dependency_ids(data) == ["apache", "java"]

    def test_empty(self):
        """No items yields an empty list."""
        assert parse_dependency_ids({"items": []}) == []

    @pytest.mark.parametrize("data", [{"items": [{"id": "java"}]}, {"nope": []}, None, ["java"]])
    def test_rejects_bad_shapes(self, data):
        """Object items or a missing array yield None."""
        assert parse_dependency_ids(data) is None


class TestParseFlavorIds:
    """Flavor id parsing."""

    def test_parses_ids(self):
        """Object items contribute their id."""
        data = {"total_entries": 2, "total_pages": 1,
                "items": [{"id": "tomcat-server"}, {"id": "ajp", "extra": 1}]}
        assert parse_flavor_ids(data) == ["ajp", "tomcat-server"]

    @pytest.mark.parametrize("data", [{"items": ["tomcat-server"]}, {"items": [{}]}, None])
    def test_rejects_bad_shapes(self, data):
        """Bare strings or missing ids yield None."""
        assert parse_flavor_ids(data) is None


class TestParseStackReference:
    """Stack reference parsing."""

    def test_parses_reference(self):
        """id and stack_url are required."""
        ref = parse_stack_reference({"id": "stackid1", "stack_url": "https://example.com/stackurl1"})
        assert ref == StackReference("stackid1", "https://example.com/stackurl1")

    @pytest.mark.parametrize("data", [{"id": "stackid1"}, {"stack_url": "u"}, None, []])
    def test_raises_on_bad_shape(self, data):
        """Malformed references raise so the caller can report them."""
        with pytest.raises((KeyError, TypeError)):
            parse_stack_reference(data)
