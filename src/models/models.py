"""Data models and schemas for the diabetic recipe service.

Defines Pydantic models for request validation, the structural recipe shape
returned by the model, and the error body.
All models use Pydantic v2.
"""

from typing import Any, List, Optional, Annotated, Union

from pydantic import BaseModel, ConfigDict, Field


class RecipeRequest(BaseModel):
    """Inbound request body: a free-text ingredient list.

    Whitespace is stripped before the length check, so "   " is rejected the
    same way as a missing field.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    ingredients: Annotated[
        str,
        Field(min_length=1, description="Comma-separated ingredients to cook with, e.g. 'broccoli, olive oil'"),
    ]


class RecipeIngredients(BaseModel):
    """Ingredient lists of a generated recipe."""

    model_config = ConfigDict(extra="allow")

    provided: Annotated[List[str], Field(description="Ingredients from the request, with quantities and GI notes")]
    # Extras are passed through unchecked, whatever shape the model used
    optional: Annotated[Optional[Any], Field(None, description="Optional extras suggested by the model")]


class Nutrition(BaseModel):
    """Per-serving nutrition estimate. Values are passed through unchecked."""

    model_config = ConfigDict(extra="allow")

    carbs: Optional[Any] = None
    protein: Optional[Any] = None
    fat: Optional[Any] = None
    fiber: Optional[Any] = None
    calories: Optional[Any] = None
    gi: Optional[Any] = None
    gl: Optional[Any] = None


class Recipe(BaseModel):
    """Structural shape of a recipe produced by the model.

    Only title, ingredients.provided and instructions are required. The title
    must be a string and the two lists must hold strings; a numeric title is
    rejected as a malformed recipe. Every other field, known or unknown, is
    accepted with any value.
    """

    model_config = ConfigDict(extra="allow")

    title: Annotated[str, Field(description="Creative recipe name")]
    ingredients: RecipeIngredients
    instructions: Annotated[List[str], Field(description="Step-by-step cooking instructions")]
    # Non-object nutrition values fall through to Any and are kept as-is
    nutrition: Annotated[Optional[Union[Nutrition, Any]], Field(None, union_mode="left_to_right")]
    tips: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Error body returned for every non-200 response."""

    error: Annotated[str, Field(description="Short human-readable description of the failure")]
    code: Annotated[str, Field(description="Stable machine-readable error code")]
    message: Annotated[Optional[str], Field(None, description="Additional guidance or upstream error detail")]
