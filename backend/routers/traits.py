"""
POST /api/traits, /api/render, /api/describe
GET  /api/vocabulary, /api/default

Thin HTTP layer over type_traits/. Builds one immutable TypeDescription per request
and hands the same snapshot to the evaluator and the renderer.
"""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, field_validator

from type_traits.attributes import (
    ATTRIBUTE_GROUPS,
    ATTRIBUTE_NAMES,
    TypeClass,
    TypeDescription,
    default_description,
    is_compound,
    is_fundamental,
    is_object,
    is_scalar,
)
from type_traits.evaluator import REASON_DESCRIPTIONS, evaluate
from type_traits.render import try_render

logger = logging.getLogger(__name__)

router = APIRouter()


class TypeDescriptionIn(BaseModel):
    type_class: TypeClass       = TypeClass.CLASS
    attributes: dict[str, bool] = Field(default_factory=dict)

    @field_validator("attributes")
    @classmethod
    def _known_attributes(cls, v: dict[str, bool]) -> dict[str, bool]:
        unknown = sorted(set(v) - set(ATTRIBUTE_NAMES))
        if unknown:
            raise ValueError(f"unknown attributes: {', '.join(unknown)}")
        return v

    def to_description(self) -> TypeDescription:
        return TypeDescription.from_flags(self.type_class, self.attributes)


def _description_out(td: TypeDescription) -> dict:
    return {"type_class": td.type_class.value, "attributes": td.flags()}


@router.get("/api/vocabulary")
def vocabulary():
    return {
        "type_classes": [
            {
                "name":        t.value,
                "fundamental": is_fundamental(t),
                "compound":    is_compound(t),
                "object":      is_object(t),
                "scalar":      is_scalar(t),
            }
            for t in TypeClass
        ],
        "attribute_groups": {g: list(names) for g, names in ATTRIBUTE_GROUPS.items()},
        "reason_descriptions": REASON_DESCRIPTIONS,
    }


@router.get("/api/default")
def default():
    return _description_out(default_description())


@router.post("/api/traits")
def traits(req: TypeDescriptionIn):
    return evaluate(req.to_description()).to_dict()


@router.post("/api/render")
def render(req: TypeDescriptionIn):
    result = try_render(req.to_description())
    if not result.ok:
        logger.info("render rejected: %s", result.error)
        raise HTTPException(
            status_code=422,
            detail={"error": result.error.kind, "message": str(result.error)},
        )
    return {"text": result.text}


@router.post("/api/describe")
def describe(req: TypeDescriptionIn):
    td     = req.to_description()
    report = evaluate(td)
    result = try_render(td)
    if not result.ok:
        logger.info("render rejected: %s", result.error)

    return {
        **_description_out(td),
        **report.to_dict(),
        "code":  result.text,
        "error": (
            {"error": result.error.kind, "message": str(result.error)}
            if result.error else None
        ),
    }
