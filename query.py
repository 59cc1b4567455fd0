#!/usr/bin/env python3
"""Ad hoc query runner for Diabetic Recipe Service.

Generate a recipe directly without starting the API server.

Usage:
    python query.py "broccoli, olive oil"
    python query.py --debug "chicken, spinach"  # Show full JSON response

Features:
- Runs the same RecipeHandler pipeline as the HTTP endpoint
- Formatted recipe output (title, ingredients, steps, nutrition, tips)
- Debug mode to display the raw JSON body
- Non-zero exit code on any error
"""

import asyncio
import json
import sys
from typing import Any

from rich.console import Console
from rich.markdown import Markdown

from src.handlers.recipe_handler import RecipeHandler
from src.utils.logger import logger

console = Console()


def format_recipe_markdown(recipe: dict[str, Any]) -> str:
    """Render a recipe dict as markdown.

    Optional sections are skipped when the model left them out.
    """
    lines = [f"# {recipe.get('title', 'Untitled recipe')}", ""]

    ingredients = recipe.get("ingredients") or {}
    lines.append("## Ingredients")
    lines.extend(f"- {item}" for item in ingredients.get("provided", []))
    optional = ingredients.get("optional") or []
    if not isinstance(optional, list):
        optional = [optional]
    if optional:
        lines.append("")
        lines.append("**Optional:**")
        lines.extend(f"- {item}" for item in optional)

    lines.append("")
    lines.append("## Instructions")
    lines.extend(f"{idx}. {step}" for idx, step in enumerate(recipe.get("instructions", []), start=1))

    nutrition = recipe.get("nutrition")
    if isinstance(nutrition, dict) and nutrition:
        lines.append("")
        lines.append("## Nutrition")
        lines.extend(f"- **{key}**: {value}" for key, value in nutrition.items())

    tips = recipe.get("tips")
    if tips:
        lines.append("")
        lines.append(f"> 💡 {tips}")

    return "\n".join(lines)


def run_query(ingredients: str, debug: bool = False) -> int:
    """Generate one recipe and print it.

    Args:
        ingredients: Ingredient list as it would be sent in the request body.
        debug: If True, also display the full JSON body.

    Returns:
        Process exit code: 0 on success, 1 on any error.
    """
    handler = RecipeHandler()
    body = json.dumps({"ingredients": ingredients})

    logger.info(f"Running query: {ingredients}")
    result = asyncio.run(handler.handle(method="POST", body=body, client_id="cli"))
    console.print()

    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print_json(data=result.body)
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print()

    if result.status_code != 200:
        message = result.body.get("message")
        console.print(f"[red]✗ {result.body['code']}: {result.body['error']}[/red]")
        if message:
            console.print(f"[dim]{message}[/dim]")
        return 1

    console.print(Markdown(format_recipe_markdown(result.body)))
    return 0


if __name__ == "__main__":
    args = sys.argv[1:]
    debug_mode = False
    if args and args[0] == "--debug":
        debug_mode = True
        args = args[1:]

    if not args:
        print("Usage: python query.py [--debug] \"<ingredients>\"")
        print("")
        print("Examples:")
        print("  python query.py \"broccoli, olive oil\"")
        print("  python query.py --debug \"chicken, spinach, garlic\"")
        sys.exit(1)

    try:
        sys.exit(run_query(" ".join(args), debug=debug_mode))
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
