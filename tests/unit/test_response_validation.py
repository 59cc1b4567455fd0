"""Unit tests for structural validation of model output."""

import json

import pytest

from src.hooks.response_validation import validate_recipe_content
from src.utils.errors import EmptyAIResponseError, InvalidRecipeFormatError


VALID_RECIPE = {
    "title": "Broc and Roll Bowl",
    "ingredients": {"provided": ["2 cups broccoli (GI=15)", "1 tbsp olive oil"], "optional": ["lemon zest"]},
    "instructions": ["Steam the broccoli.", "Drizzle with olive oil."],
    "nutrition": {"carbs": "8g", "fiber": "5g", "gl": 3, "calories": 180, "protein": "6g", "fat": "14g"},
    "tips": "Add chickpeas for protein.",
}


class TestValidRecipe:
    """Well-formed content is returned unchanged."""

    def test_returns_parsed_recipe_unmodified(self):
        result = validate_recipe_content(json.dumps(VALID_RECIPE))
        assert result == VALID_RECIPE

    def test_extra_fields_preserved(self):
        recipe = dict(VALID_RECIPE, servings=2, prep_time="10 min")
        result = validate_recipe_content(json.dumps(recipe))
        assert result["servings"] == 2
        assert result["prep_time"] == "10 min"

    def test_minimal_recipe_not_filled_with_defaults(self):
        minimal = {"title": "T", "ingredients": {"provided": ["x"]}, "instructions": ["y"]}
        assert validate_recipe_content(json.dumps(minimal)) == minimal

    @pytest.mark.parametrize("optional", [None, "garlic", [{"item": "garlic"}], {"garnish": "parsley"}, 3])
    def test_any_optional_ingredients_shape_accepted(self, optional):
        recipe = {"title": "T", "ingredients": {"provided": ["x"], "optional": optional}, "instructions": ["y"]}
        assert validate_recipe_content(json.dumps(recipe)) == recipe

    @pytest.mark.parametrize(
        "extras",
        [
            {"nutrition": "about 200 kcal", "tips": ["Serve warm", "Add lemon"]},
            {"nutrition": None, "tips": None},
            {"nutrition": [1, 2], "tips": {"storage": "fridge"}, "servings": "2-3"},
            {"nutrition": {"carbs": None, "gi": "low", "sodium": [120, "mg"]}},
        ],
    )
    def test_non_required_fields_pass_through(self, extras):
        recipe = dict({"title": "T", "ingredients": {"provided": ["x"]}, "instructions": ["y"]}, **extras)
        assert validate_recipe_content(json.dumps(recipe)) == recipe


class TestEmptyResponse:
    """Missing or blank content is EMPTY_AI_RESPONSE."""

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_content(self, content):
        with pytest.raises(EmptyAIResponseError) as exc:
            validate_recipe_content(content)
        assert exc.value.code == "EMPTY_AI_RESPONSE"
        assert exc.value.status_code == 500


class TestInvalidFormat:
    """Unparseable or wrong-shape content is INVALID_RECIPE_FORMAT."""

    @pytest.mark.parametrize("content", ["Here is your recipe!", '{"title": "Oops"', "{'title': 'single quotes'}"])
    def test_unparseable_content(self, content):
        with pytest.raises(InvalidRecipeFormatError) as exc:
            validate_recipe_content(content)
        assert exc.value.code == "INVALID_RECIPE_FORMAT"
        assert "PARSE_ERROR" in exc.value.message

    @pytest.mark.parametrize("content", ["[]", '"a string"', "42", "null"])
    def test_non_object_json(self, content):
        with pytest.raises(InvalidRecipeFormatError):
            validate_recipe_content(content)

    @pytest.mark.parametrize("field", ["title", "ingredients", "instructions"])
    def test_missing_required_field(self, field):
        recipe = dict(VALID_RECIPE)
        del recipe[field]
        with pytest.raises(InvalidRecipeFormatError) as exc:
            validate_recipe_content(json.dumps(recipe))
        assert field in exc.value.message

    @pytest.mark.parametrize("title", [42, None, ["Broc Star"]])
    def test_non_string_title_rejected(self, title):
        recipe = dict(VALID_RECIPE, title=title)
        with pytest.raises(InvalidRecipeFormatError) as exc:
            validate_recipe_content(json.dumps(recipe))
        assert "title" in exc.value.message

    def test_missing_ingredients_provided(self):
        recipe = dict(VALID_RECIPE, ingredients={"optional": ["salt"]})
        with pytest.raises(InvalidRecipeFormatError) as exc:
            validate_recipe_content(json.dumps(recipe))
        assert "ingredients.provided" in exc.value.message
