"""
Tests for module extraction.
"""

import pytest

from workflow_extractor.config import ExtractorConfig
from workflow_extractor.errors import TraversalLimitError
from workflow_extractor.modules import MODULE_FIELDS, ModuleRecord, extract_modules, is_module_node


def module(identifier, **extra):
    node = {"identifier": identifier, "category": "t", "name": "n", "stepReference": "s"}
    node.update(extra)
    return node


class TestIsModuleNode:
    """Test the structural module predicate."""

    def test_matches_minimal_module(self):
        assert is_module_node(module("module_1"))

    def test_name_and_step_reference_only_need_to_exist(self):
        assert is_module_node({"identifier": "module_1", "category": "t", "name": None, "stepReference": None})

    @pytest.mark.parametrize(
        "node",
        [
            {"identifier": "mod_1", "category": "t", "name": "n", "stepReference": "s"},
            {"identifier": 1, "category": "t", "name": "n", "stepReference": "s"},
            {"identifier": "module_1", "category": 5, "name": "n", "stepReference": "s"},
            {"identifier": "module_1", "name": "n", "stepReference": "s"},
            {"identifier": "module_1", "category": "t", "stepReference": "s"},
            {"identifier": "module_1", "category": "t", "name": "n"},
            ["module_1"],
            "module_1",
        ],
    )
    def test_rejects_non_modules(self, node):
        assert not is_module_node(node)


class TestExtractModules:
    """Test the depth-first module scan."""

    def test_single_nested_module(self):
        document = {"a": {"identifier": "module_1", "category": "t", "name": "n", "stepReference": "s1"}}

        modules = extract_modules(document)

        assert modules == [
            ModuleRecord(
                category="t",
                subcategory="",
                identifier="module_1",
                nextStepReference="",
                name="n",
                version="",
                stepReference="s1",
            )
        ]

    def test_record_row_has_all_fields_in_order(self):
        row = extract_modules([module("module_1")])[0].as_row()

        assert list(row) == MODULE_FIELDS
        assert all(isinstance(v, str) for v in row.values())

    def test_falsy_values_become_empty_text(self):
        node = module("module_1", subcategory=False, nextStepReference=None, version=0, name=None)

        record = extract_modules(node)[0]

        assert record.subcategory == ""
        assert record.nextStepReference == ""
        assert record.version == ""
        assert record.name == ""

    def test_non_text_values_are_rendered_as_text(self):
        record = extract_modules(module("module_1", version=2, subcategory=True))[0]

        assert record.version == "2"
        assert record.subcategory == "true"

    def test_modules_inside_modules_are_found(self):
        inner = module("module_inner")
        outer = module("module_outer", children={"next": inner})

        ids = [m.identifier for m in extract_modules({"root": outer})]

        assert ids == ["module_outer", "module_inner"]

    def test_discovery_order_follows_document_order(self):
        document = {
            "b": module("module_b"),
            "list": [module("module_c"), {"deeper": [module("module_d")]}, module("module_e")],
            "a": module("module_a"),
        }

        ids = [m.identifier for m in extract_modules(document)]

        assert ids == ["module_b", "module_c", "module_d", "module_e", "module_a"]

    def test_scalars_and_empty_documents(self):
        assert extract_modules({}) == []
        assert extract_modules([]) == []
        assert extract_modules("module_1") == []
        assert extract_modules(None) == []

    def test_depth_budget(self):
        document = module("module_top")
        node = document
        for _ in range(20):
            node["child"] = {}
            node = node["child"]

        with pytest.raises(TraversalLimitError) as exc_info:
            extract_modules(document, ExtractorConfig(max_depth=10))
        assert exc_info.value.limit == "max_depth"

    def test_node_budget(self):
        document = [module(f"module_{i}") for i in range(20)]

        with pytest.raises(TraversalLimitError) as exc_info:
            extract_modules(document, ExtractorConfig(max_nodes=5))
        assert exc_info.value.limit == "max_nodes"

    def test_very_deep_document_does_not_overflow_the_stack(self):
        document = {}
        for _ in range(5000):
            document = {"x": document}

        with pytest.raises(TraversalLimitError):
            extract_modules(document)
