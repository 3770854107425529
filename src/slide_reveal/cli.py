"""CLI interface for slide-reveal."""

import dataclasses
import json
import os
import random
import sys

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .backend import GoogleSlidesBackend, SlidesBackend, load_credentials
from .colors import resolve_color
from .config import (
    load_deck_config,
    load_review_data,
    parse_deck_config,
    parse_review_data,
    parse_slide_target,
)
from .errors import SlideRevealError
from .generator import SlideGenerator
from .logging_setup import configure_logging
from .models import DeckConfig, GenerationResult, ReviewData, TextElementSpec
from .preview import (
    PreviewOutputProvider,
    generate_preview_frames,
    resolve_output_provider,
    supported_preview_extensions,
)
from .reveal import RevealAnimator

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)

DEFAULT_TOKEN_FILE = "~/.slide-reveal/tokens.json"
OUTPUT_FORMATS = ("url", "json")


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def generate(
    input_file: str = typer.Option(
        None,
        "--input",
        "-i",
        help="Deck config JSON file (default: stdin)",
    ),
    output: str = typer.Option(
        "url",
        "--output",
        "-o",
        help=f"Result format ({', '.join(OUTPUT_FORMATS)})",
    ),
    presentation_id: str = typer.Option(
        None,
        "--presentation-id",
        "-p",
        help="Existing presentation to replace, append to, or update",
    ),
    append: bool = typer.Option(
        False,
        "--append",
        help="Append slides instead of replacing existing ones",
    ),
    update_slide: str = typer.Option(
        None,
        "--update-slide",
        help="Rebuild one existing slide in place (index or 'last')",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every dispatched batch",
    ),
) -> None:
    """
    Generate Google Slides from a deck config.

    Without --presentation-id a new presentation is created. With it, existing
    slides are replaced, appended to (--append), or a single slide is rebuilt
    in place (--update-slide), where elements marked "animate": "matrix" are
    revealed frame by frame.

    Examples:
      # New presentation from a file
      slide-reveal generate -i deck.json

      # Live matrix reveal on the last slide
      slide-reveal generate -i slide.json -p PRESENTATION_ID --update-slide last
    """
    configure_logging(verbose, err_console)
    try:
        if output not in OUTPUT_FORMATS:
            raise CLIError(f"Invalid output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}")

        config = _apply_overrides(
            _load_config(input_file),
            presentation_id=presentation_id,
            append=append,
            update_slide=update_slide,
        )
        generator = SlideGenerator(_create_backend())
        _print_result(generator.generate(config), output)

    except (CLIError, SlideRevealError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def review(
    input_file: str = typer.Option(
        None,
        "--input",
        "-i",
        help="Review data JSON file (default: stdin)",
    ),
    output: str = typer.Option(
        "url",
        "--output",
        "-o",
        help=f"Result format ({', '.join(OUTPUT_FORMATS)})",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every dispatched batch",
    ),
) -> None:
    """
    Generate a pull request review deck.

    Creates a new presentation with title, summary, impact, risk and
    verdict slides.

    Examples:
      slide-reveal review -i review.json

      cat review.json | slide-reveal review -o json
    """
    configure_logging(verbose, err_console)
    try:
        if output not in OUTPUT_FORMATS:
            raise CLIError(f"Invalid output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}")

        review_data = _load_review(input_file)
        generator = SlideGenerator(_create_backend())
        _print_result(generator.generate_review(review_data), output)

    except (CLIError, SlideRevealError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def preview(
    input_file: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="Deck config JSON file",
    ),
    out: str = typer.Option(
        "reveal-preview.gif",
        "--output",
        "-o",
        help=f"Preview animation file ({', '.join(supported_preview_extensions())})",
    ),
    slide: int = typer.Option(0, "--slide", help="Slide index in the config"),
    element: int | None = typer.Option(
        None,
        "--element",
        help="Element index on the slide (default: first animated element)",
    ),
    frame_duration: int = typer.Option(
        120,
        "--frame-duration",
        help="Milliseconds per frame in the preview",
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for glyph randomness"),
) -> None:
    """Render the matrix reveal of one element to a local GIF or WebP."""
    try:
        config = _load_config(input_file)
        spec = _select_element(config, slide, element)
        provider = _resolve_provider(out)

        animator = RevealAnimator(
            "preview",
            "preview_element",
            spec,
            resolve_color(spec.color, config.theme),
            rng=random.Random(seed),
        )
        console.print(
            f"[bold blue]Rendering {animator.total_frames + 1} frames of '{escape(spec.text)}'...[/bold blue]"
        )
        encoded = provider.encode(generate_preview_frames(animator), frame_duration=frame_duration)
        provider.write(encoded)
        console.print(f"[green]✓[/green] Preview saved to {out}")

    except (CLIError, SlideRevealError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _load_config(input_file: str | None) -> DeckConfig:
    """Load the deck config from a file, or from stdin when no file is given."""
    if input_file:
        return load_deck_config(input_file)
    if sys.stdin.isatty():
        raise CLIError("No input received. Provide JSON via stdin or --input flag.")
    return parse_deck_config(sys.stdin.read())


def _load_review(input_file: str | None) -> ReviewData:
    if input_file:
        return load_review_data(input_file)
    if sys.stdin.isatty():
        raise CLIError("No input received. Provide JSON via stdin or --input flag.")
    return parse_review_data(sys.stdin.read())


def _print_result(result: GenerationResult, output: str) -> None:
    if output == "json":
        console.print_json(json.dumps(result.to_dict()))
    else:
        console.print(result.presentation_url, soft_wrap=True)


def _apply_overrides(
    config: DeckConfig,
    *,
    presentation_id: str | None,
    append: bool,
    update_slide: str | None,
) -> DeckConfig:
    changes: dict[str, object] = {}
    if presentation_id:
        changes["presentation_id"] = presentation_id
    if append:
        changes["append"] = True
    if update_slide is not None:
        changes["update_slide"] = parse_slide_target(update_slide)
    return dataclasses.replace(config, **changes) if changes else config


def _select_element(config: DeckConfig, slide: int, element: int | None) -> TextElementSpec:
    if not 0 <= slide < len(config.slides):
        raise CLIError(f"Slide {slide} not found; config has {len(config.slides)} slide(s)")
    elements = config.slides[slide].elements
    if element is None:
        animated = [elem for elem in elements if elem.is_animated]
        if not animated:
            raise CLIError(f"Slide {slide} has no element with \"animate\": \"matrix\"")
        return animated[0]
    if not 0 <= element < len(elements):
        raise CLIError(f"Element {element} not found; slide {slide} has {len(elements)} element(s)")
    return elements[element]


def _resolve_provider(out: str) -> PreviewOutputProvider:
    try:
        return resolve_output_provider(out)
    except ValueError as exc:
        raise CLIError(str(exc))


def _create_backend() -> SlidesBackend:
    token_file = os.getenv("SLIDE_REVEAL_TOKEN_FILE", DEFAULT_TOKEN_FILE)
    return GoogleSlidesBackend(load_credentials(token_file))


app = typer.Typer(help="Generate Google Slides with a live matrix reveal.")
app.command("generate")(generate)
app.command("review")(review)
app.command("preview")(preview)

if __name__ == "__main__":
    app()
