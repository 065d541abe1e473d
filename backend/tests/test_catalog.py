from formbuilder import catalog
from formbuilder.schemas import FIELD_VARIANTS


def test_every_tag_has_a_variant_accepting_it():
    for tag, spec in catalog.CATALOG.items():
        variant = FIELD_VARIANTS[spec.family]
        field = variant(id="f1", type=tag, label="x")
        assert field.type == tag


def test_choice_and_composite_tags():
    assert catalog.tags_of(catalog.FieldFamily.CHOICE) == ["select", "multiSelect"]
    assert catalog.has_options("select")
    assert not catalog.has_options("text")
    assert not catalog.has_options(None)
    assert catalog.has_sub_field_options("naturalGasInput")
    assert not catalog.has_sub_field_options("select")


def test_blank_field_defaults():
    assert catalog.blank_field("text") == {"type": "text", "label": "New text field", "required": False}
    assert catalog.blank_field("multiSelect")["options"] == []


def test_default_sub_field_options_are_fresh_copies():
    first = catalog.default_sub_field_options()
    first["units"].append({"label": "GJ", "value": "gj"})
    first["uses"][0]["label"] = "changed"

    second = catalog.default_sub_field_options()
    assert [option["value"] for option in second["units"]] == ["kwh", "mj_kg_product", "m3"]
    assert second["uses"][0]["label"] == "Cooling"


def test_validation_keys_follow_type():
    assert catalog.validation_keys("text") == {"minLength", "maxLength", "pattern"}
    assert catalog.validation_keys("number") == {"min", "max"}
    assert {"minItems", "maxItems"} <= catalog.validation_keys("textArray")
    assert catalog.validation_keys("checkbox") == frozenset()


def test_describe_lists_every_type_once():
    listing = catalog.describe()
    assert [entry["type"] for entry in listing] == list(catalog.CATALOG)
    gas = next(entry for entry in listing if entry["type"] == "naturalGasInput")
    assert gas["hasSubFieldOptions"] is True
    assert gas["family"] == "composite"
