from blobdata import filler, prop
from scumblob.extractors import (
    BODY_SIMULATION_KEYS,
    TRACTOR_CARRIAGE_MARKER,
    extract_base_attributes,
    extract_body_simulation,
    extract_item_container_entity_id,
    extract_owner_id,
)


def test_body_simulation_reports_missing_keys(body_blob):
    result = extract_body_simulation(body_blob)
    assert result.values["BaseStrength"] == 4.5
    assert result.values["LifeTimeSinceSpawn"] == 12345.5
    missing = {w.key for w in result.warnings}
    assert "PhoenixTearsAmount" in missing
    assert len(result.values) + len(result.warnings) == len(BODY_SIMULATION_KEYS)


def test_base_attributes_default_to_zero(body_blob):
    assert extract_base_attributes(body_blob) == {
        "BaseStrength": 4.5,
        "BaseConstitution": 3.25,
        "BaseDexterity": 2.0,
        "BaseIntelligence": 0,
    }


def test_owner_id_uses_first_decodable_occurrence():
    data = (
        prop("_owningUserProfileId", "StrProperty", b"\x00" * 4)
        + prop("_owningUserProfileId", "Int64Property", 42)
        + prop("_owningUserProfileId", "Int64Property", 43)
    )
    owner = extract_owner_id(data)
    assert owner == 42
    assert isinstance(owner, int)


def test_owner_id_missing():
    assert extract_owner_id(filler()) is None


def test_item_container_entity_id():
    data = (
        prop("_itemContainerEntityId", "Int64Property", 1)
        + prop(TRACTOR_CARRIAGE_MARKER, "ObjectProperty", b"\x00" * 8)
        + prop("_itemContainerEntityId", "Int64Property", 90210)
    )
    assert extract_item_container_entity_id(data) == 90210


def test_item_container_entity_id_without_attachment():
    data = prop("_itemContainerEntityId", "Int64Property", 1)
    assert extract_item_container_entity_id(data) is None
