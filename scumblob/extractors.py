"""Named lookups over the save database's blob columns.

prisoner.body_simulation   -> body simulation attributes
vehicle entity blobs       -> owner profile id, attached container id
"""
from __future__ import annotations

from typing import Iterable, Optional

from scumblob.blob.decoder import (
    DecodeResult,
    decode_after_marker,
    decode_all_occurrences,
    decode_properties,
)
from scumblob.blob.reader import Number

BODY_SIMULATION_KEYS = [
    "IsDead",
    "BaseStrength",
    "BaseConstitution",
    "BaseDexterity",
    "BaseIntelligence",
    "InitialAge",
    "LifeTimeSinceInitialization",
    "LifeTimeSinceSpawn",
    "TimeOfDeath",
    "TimeOfRevive",
    "TimeOfComa",
    "TimeOfComaWakeUp",
    "Stamina",
    "AccumulatedFatigue",
    "HeartRate",
    "BreathingRate",
    "OxygenSaturation",
    "BodyTemperature",
    "PhoenixTearsAmount",
]

BASE_ATTRIBUTE_KEYS = [
    "BaseStrength",
    "BaseConstitution",
    "BaseDexterity",
    "BaseIntelligence",
]

OWNER_ID_KEY = "_owningUserProfileId"
ITEM_CONTAINER_KEY = "_itemContainerEntityId"
TRACTOR_CARRIAGE_MARKER = "VehicleAttachment:BPC_Tractor_Carriage"


def extract_body_simulation(blob: bytes, keys: Iterable[str] = BODY_SIMULATION_KEYS) -> DecodeResult:
    return decode_properties(blob, keys)


def extract_base_attributes(blob: bytes) -> dict[str, Number]:
    """Base attribute values, 0 for any attribute missing from the blob."""
    result = decode_properties(blob, BASE_ATTRIBUTE_KEYS)
    return {key: result.values.get(key, 0) for key in BASE_ATTRIBUTE_KEYS}


def extract_owner_id(blob: bytes) -> Optional[int]:
    """Owning user profile id of a vehicle, from the first decodable occurrence."""
    occurrences = decode_all_occurrences(blob, OWNER_ID_KEY)
    if not occurrences:
        return None
    return int(occurrences[0].value)


def extract_item_container_entity_id(blob: bytes) -> Optional[int]:
    """Container entity id of a vehicle's tractor carriage attachment."""
    value = decode_after_marker(blob, TRACTOR_CARRIAGE_MARKER, ITEM_CONTAINER_KEY)
    if value is None:
        return None
    return int(value)
