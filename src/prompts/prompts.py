"""Prompt construction for diabetic recipe generation.

The prompt asks the model to act as a diabetes nutritionist and to answer with
a single JSON object whose shape matches the Recipe model.
"""

RECIPE_FORMAT_EXAMPLE = """{
  "title": "Recipe Name",
  "ingredients": {
    "provided": ["1 cup broccoli (GI=15)"],
    "optional": ["1 tbsp olive oil"]
  },
  "instructions": ["Step 1..."],
  "nutrition": {
    "carbs": "8g",
    "fiber": "5g",
    "gi": 35,
    "gl": 3,
    "calories": 250,
    "protein": "20g",
    "fat": "10g"
  },
  "tips": "Pair with whole-grain bread for a lower GI meal"
}"""


def build_recipe_prompt(ingredients: str, max_gi: int = 50, max_gl: int = 10) -> str:
    """Build the user prompt for one recipe request.

    Args:
        ingredients: Ingredient list exactly as the caller sent it (already trimmed).
        max_gi: Upper bound on glycemic index the recipe should respect.
        max_gl: Upper bound on glycemic load per serving.

    Returns:
        str: Prompt text embedding the ingredients, dietary rules and JSON format.
    """
    return f"""As a diabetes nutritionist, create a recipe with: {ingredients}.

Rules:
1. Title: fun, creative name using food puns
2. Diabetic-friendly: every ingredient GI < {max_gi}, total GL < {max_gl} per serving
3. Use the provided ingredients; list anything extra under "optional"
4. Respond with ONLY a JSON object in exactly this format:
{RECIPE_FORMAT_EXAMPLE}"""
