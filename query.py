#!/usr/bin/env python3
"""Ad hoc recipe runner for Chef Engine.

Generate a recipe directly without starting the HTTP server.

Usage:
    python query.py "chicken, garlic, rice"
    python query.py --debug "chicken, garlic"        # Show full JSON result
    python query.py --html "chicken, garlic"         # Print rendered HTML instead of markdown
    python query.py --image dish.png "chicken, rice" # Save the illustration to a file

Features:
- Ingredients are split on commas and sent in the order given
- Markdown rendering with rich
- Clean exit after completion
"""

import asyncio
import base64
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

from chef_engine.gemini.errors import GenerationError
from chef_engine.services.orchestrator import RecipeGenerator
from chef_engine.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--html] [--image PATH] "<ingredient>, <ingredient>, ..."'


def parse_ingredients(raw: str) -> list[str]:
    return [token.strip() for token in raw.split(",") if token.strip()]


def save_image(data_uri: str, image_path: str) -> None:
    """Decode a data URI and write the bytes to image_path."""
    _, encoded = data_uri.split(",", 1)
    Path(image_path).write_bytes(base64.b64decode(encoded))
    console.print(f"[green]✓ Image saved to {image_path}[/green]")


def run_query(raw_ingredients: str, debug: bool = False, html: bool = False, image_path: Optional[str] = None) -> None:
    """Generate one recipe and print it.

    Args:
        raw_ingredients: Comma-separated ingredients.
        debug: If True, display the full result as JSON.
        html: If True, print the rendered HTML instead of markdown.
        image_path: Optional file to write the generated PNG to.
    """
    try:
        ingredients = parse_ingredients(raw_ingredients)
        logger.info(f"Ingredients: {ingredients}")

        result = asyncio.run(RecipeGenerator().generate_recipe(ingredients))
        console.print()

        if debug:
            console.print("[bold cyan]Debug Mode: Full Result[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=result.model_dump())
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        if html:
            console.print(result.text, markup=False)
        else:
            console.print(Markdown(result.markdown))

        if result.image is None:
            console.print("[yellow]No image generated[/yellow]")
        elif image_path:
            save_image(result.image, image_path)

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except GenerationError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    debug_mode = False
    html_mode = False
    image_path = None
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag == "--html":
            html_mode = True
            argv_start += 1
        elif flag == "--image":
            argv_start += 1
            if argv_start >= len(sys.argv):
                print("Error: --image flag requires a file path")
                sys.exit(1)
            image_path = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if argv_start >= len(sys.argv):
        print("Error: No ingredients provided")
        print(USAGE)
        sys.exit(1)

    # Join remaining arguments so unquoted input like `chicken, rice` still works
    run_query(" ".join(sys.argv[argv_start:]), debug=debug_mode, html=html_mode, image_path=image_path)
