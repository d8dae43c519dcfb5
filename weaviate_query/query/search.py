"""
@file: search.py
Search clauses: the primary retrieval mode of a query.

Each clause is an immutable value validated at construction. A descriptor holds at most
one clause, so two search modes can never be combined. to_argument() returns the
(argument name, wire value) pair for the query's argument list; FetchAll and FetchById
carry no search argument (FetchById is sent as a 'where' on the object id).

Classes:
    FetchAll, FetchById, NearText (with Move), NearVector, NearObject, NearImage,
    NearMedia, Bm25, Hybrid
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from weaviate_query.exceptions import ValidationError
from weaviate_query.graphql import EnumValue

MEDIA_KINDS = {
    "audio": "nearAudio",
    "video": "nearVideo",
    "image": "nearImage",
    "depth": "nearDepth",
    "thermal": "nearThermal",
    "imu": "nearIMU",
}

FUSION_TYPES = ("rankedFusion", "relativeScoreFusion")


def _check_number(name: str, value, low=None, high=None):
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{name} must be a finite number, got {value!r}")
    if (low is not None and value < low) or (high is not None and value > high):
        raise ValidationError(f"{name} must be between {low} and {high}, got {value}")


def _check_threshold(certainty, distance):
    _check_number("certainty", certainty, 0.0, 1.0)
    _check_number("distance", distance)
    if certainty is not None and distance is not None:
        raise ValidationError("certainty and distance cannot be combined")


def _check_text(name: str, value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string, got {value!r}")


def _concepts(name: str, concepts) -> Tuple[str, ...]:
    items = (concepts,) if isinstance(concepts, str) else tuple(concepts)
    if not items:
        raise ValidationError(f"{name} requires at least one concept")
    for item in items:
        _check_text(f"{name} concept", item)
    return items


def _threshold(params: Dict[str, Any], certainty, distance) -> Dict[str, Any]:
    if certainty is not None:
        params["certainty"] = float(certainty)
    if distance is not None:
        params["distance"] = float(distance)
    return params


@dataclass(frozen=True)
class FetchAll:
    """Plain fetch with no similarity or keyword search."""

    def to_argument(self) -> Optional[Tuple[str, Any]]:
        return None


@dataclass(frozen=True)
class FetchById:
    id: str

    def __post_init__(self):
        _check_text("id", self.id)

    def to_argument(self) -> Optional[Tuple[str, Any]]:
        return None


@dataclass(frozen=True)
class Move:
    """Shift a nearText search towards or away from concepts; force is in [0, 1]."""
    concepts: Tuple[str, ...]
    force: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "concepts", _concepts("move", self.concepts))
        _check_number("force", self.force, 0.0, 1.0)

    def to_wire(self) -> Dict[str, Any]:
        return {"concepts": list(self.concepts), "force": float(self.force)}


@dataclass(frozen=True)
class NearText:
    concepts: Tuple[str, ...]
    certainty: Optional[float] = None
    distance: Optional[float] = None
    move_to: Optional[Move] = None
    move_away: Optional[Move] = None

    def __post_init__(self):
        object.__setattr__(self, "concepts", _concepts("nearText", self.concepts))
        _check_threshold(self.certainty, self.distance)
        for move in (self.move_to, self.move_away):
            if move is not None and not isinstance(move, Move):
                raise ValidationError(f"move_to/move_away must be a Move, got {move!r}")

    def to_argument(self) -> Tuple[str, Any]:
        params = _threshold({"concepts": list(self.concepts)}, self.certainty, self.distance)
        if self.move_to is not None:
            params["moveTo"] = self.move_to.to_wire()
        if self.move_away is not None:
            params["moveAwayFrom"] = self.move_away.to_wire()
        return "nearText", params


@dataclass(frozen=True)
class NearVector:
    vector: Tuple[float, ...]
    certainty: Optional[float] = None
    distance: Optional[float] = None

    def __post_init__(self):
        vector = tuple(self.vector)
        if not vector:
            raise ValidationError("nearVector requires a non-empty vector")
        for component in vector:
            _check_number("vector component", component)
        object.__setattr__(self, "vector", vector)
        _check_threshold(self.certainty, self.distance)

    def to_argument(self) -> Tuple[str, Any]:
        params = {"vector": [float(v) for v in self.vector]}
        return "nearVector", _threshold(params, self.certainty, self.distance)


@dataclass(frozen=True)
class NearObject:
    id: str
    certainty: Optional[float] = None
    distance: Optional[float] = None

    def __post_init__(self):
        _check_text("nearObject id", self.id)
        _check_threshold(self.certainty, self.distance)

    def to_argument(self) -> Tuple[str, Any]:
        return "nearObject", _threshold({"id": self.id}, self.certainty, self.distance)


@dataclass(frozen=True)
class NearImage:
    """Image similarity; data is base64-encoded image content."""
    data: str
    certainty: Optional[float] = None
    distance: Optional[float] = None

    def __post_init__(self):
        _check_text("nearImage data", self.data)
        _check_threshold(self.certainty, self.distance)

    def to_argument(self) -> Tuple[str, Any]:
        return "nearImage", _threshold({"image": self.data}, self.certainty, self.distance)


@dataclass(frozen=True)
class NearMedia:
    """Similarity over base64-encoded media of one of MEDIA_KINDS."""
    kind: str
    data: str
    certainty: Optional[float] = None
    distance: Optional[float] = None

    def __post_init__(self):
        if self.kind not in MEDIA_KINDS:
            raise ValidationError(f"Unsupported media type: {self.kind!r}. Must be one of {sorted(MEDIA_KINDS)}")
        _check_text(f"{self.kind} data", self.data)
        _check_threshold(self.certainty, self.distance)

    def to_argument(self) -> Tuple[str, Any]:
        return MEDIA_KINDS[self.kind], _threshold({self.kind: self.data}, self.certainty, self.distance)


@dataclass(frozen=True)
class Bm25:
    query: str
    properties: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        _check_text("bm25 query", self.query)
        if self.properties is not None:
            object.__setattr__(self, "properties", _concepts("bm25 properties", self.properties))

    def to_argument(self) -> Tuple[str, Any]:
        params: Dict[str, Any] = {"query": self.query}
        if self.properties:
            params["properties"] = list(self.properties)
        return "bm25", params


@dataclass(frozen=True)
class Hybrid:
    """Keyword and vector search fused; alpha 0 is pure keyword, 1 pure vector."""
    query: str
    alpha: Optional[float] = None
    fusion_type: Optional[str] = None
    properties: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        _check_text("hybrid query", self.query)
        _check_number("alpha", self.alpha, 0.0, 1.0)
        if self.fusion_type is not None and self.fusion_type not in FUSION_TYPES:
            raise ValidationError(f"Unknown fusion type: {self.fusion_type!r}. Must be one of {FUSION_TYPES}")
        if self.properties is not None:
            object.__setattr__(self, "properties", _concepts("hybrid properties", self.properties))

    def to_argument(self) -> Tuple[str, Any]:
        params: Dict[str, Any] = {"query": self.query}
        if self.alpha is not None:
            params["alpha"] = float(self.alpha)
        if self.fusion_type is not None:
            params["fusionType"] = EnumValue(self.fusion_type)
        if self.properties:
            params["properties"] = list(self.properties)
        return "hybrid", params


SEARCH_CLAUSES = (FetchAll, FetchById, NearText, NearVector, NearObject, NearImage, NearMedia, Bm25, Hybrid)
