"""Command-line interface.

Usage:
    cssfilter "#FF5733"
    cssfilter ff5733 --raw
    cssfilter 255,87,51 --copy
    cssfilter -i

The generated filter works on black elements. For other elements prepend
``brightness(0) saturate(100%)``.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import subprocess
import sys
from typing import TextIO

from cssfilter import __version__
from cssfilter.color.space import TargetColor
from cssfilter.config.presets import SOLVER_PRESETS, get_solver_preset, load_solver_json
from cssfilter.config.solver import SolverConfig
from cssfilter.exceptions import InvalidColorFormat
from cssfilter.solver.solve import FilterSolver, SolveResult

logger = logging.getLogger(__name__)

RULE = "=" * 64
THIN_RULE = "-" * 64

QUALITY_MESSAGES = {
    "perfect": ("green", "(Perfect match!)"),
    "excellent": ("green", "(Excellent match)"),
    "good": ("yellow", "(Good match - consider re-running)"),
    "poor": ("red", "(Poor match - try running again)"),
}

# Clipboard tools in order of preference
CLIPBOARD_COMMANDS = (
    ("xclip", ["xclip", "-selection", "clipboard"]),
    ("xsel", ["xsel", "--clipboard"]),
    ("wl-copy", ["wl-copy"]),
    ("pbcopy", ["pbcopy"]),
)


class Style:
    """ANSI styling, disabled when the stream is not a color terminal."""

    CODES = {
        "red": "\033[31m",
        "green": "\033[32m",
        "yellow": "\033[33m",
        "blue": "\033[34m",
        "cyan": "\033[36m",
        "bold": "\033[1m",
        "dim": "\033[2m",
    }
    RESET = "\033[0m"

    def __init__(self, enabled: bool, truecolor: bool = False):
        self.enabled = enabled
        self.truecolor = enabled and truecolor

    @classmethod
    def for_stream(cls, stream: TextIO) -> Style:
        isatty = getattr(stream, "isatty", lambda: False)()
        enabled = isatty and "NO_COLOR" not in os.environ and os.environ.get("TERM") != "dumb"
        truecolor = os.environ.get("COLORTERM", "").lower() in ("truecolor", "24bit")
        return cls(enabled, truecolor)

    def __call__(self, text: str, *styles: str) -> str:
        if not self.enabled or not styles:
            return text
        prefix = "".join(self.CODES[s] for s in styles)
        return f"{prefix}{text}{self.RESET}"

    def swatch(self, rgb: tuple[float, float, float], width: int = 10) -> str:
        r, g, b = (int(round(c)) for c in rgb)
        return f"\033[48;2;{r};{g};{b}m{' ' * width}{self.RESET}"


def copy_to_clipboard(text: str) -> bool:
    """Copy ``text`` with the first available clipboard tool.

    :returns: True if a tool accepted the text
    """
    for name, command in CLIPBOARD_COMMANDS:
        if shutil.which(name) is None:
            continue
        try:
            subprocess.run(command, input=text.encode(), check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.debug("Clipboard tool %s failed: %s", name, e)
            continue
        return True
    return False


def format_report(result: SolveResult, style: Style) -> str:
    """Render the human-readable report for one solve."""
    r, g, b = (int(round(c)) for c in result.target.rgb)
    lines = [
        "",
        style(RULE, "bold"),
        style("CSS Color Filter Generator".center(64).rstrip(), "bold"),
        style(RULE, "bold"),
        "",
        style("Target Color:", "bold"),
        f"  Hex:  {style(result.target.hex, 'cyan')}",
        f"  RGB:  {style(f'rgb({r}, {g}, {b})', 'cyan')}",
        "",
    ]

    if style.truecolor:
        lines += [style("Preview:", "bold")] + [style.swatch(result.target.rgb)] * 3 + [""]

    color, message = QUALITY_MESSAGES[result.quality]
    lines += [
        style("Generated CSS Filter:", "bold"),
        style(result.declaration, "green"),
        "",
        style("Accuracy:", "bold"),
        f"  Loss: {style(f'{result.loss:.1f}', 'yellow')} {style(message, color)}",
        "",
        style(THIN_RULE, "bold"),
        style("Note: This filter works on black elements. For non-black elements,", "dim"),
        style("      prepend: brightness(0) saturate(100%)", "dim"),
        style(THIN_RULE, "bold"),
        "",
    ]
    return "\n".join(lines)


def process_color(
    text: str,
    solver: FilterSolver,
    *,
    raw: bool = False,
    copy: bool = False,
    out: TextIO | None = None,
) -> SolveResult:
    """Solve one color and print the result.

    :raises InvalidColorFormat: If ``text`` is not a valid color
    """
    out = out if out is not None else sys.stdout
    style = Style.for_stream(out)

    target = TargetColor.from_string(text)
    if not raw:
        print(
            style("==>", "blue", "bold") + f" Calculating optimal CSS filter for {target.hex}...",
            file=out,
        )
        print(file=out)

    result = solver.solve_detailed(target)

    if raw:
        print(result.declaration, file=out)
    else:
        print(format_report(result, style), file=out)

    if copy:
        if copy_to_clipboard(result.declaration):
            print(style("[OK]", "green", "bold") + " CSS filter copied to clipboard!", file=out)
        else:
            print(
                style("[WARN]", "yellow", "bold")
                + " Could not copy to clipboard (install xclip, xsel, wl-copy, or pbcopy)",
                file=out,
            )
    return result


def interactive_mode(solver: FilterSolver, *, copy: bool = True) -> None:
    """Prompt for colors until the user enters ``q`` or closes stdin.

    Every result is copied to the clipboard unless ``copy`` is False.
    """
    style = Style.for_stream(sys.stdout)
    print()
    print(style("CSS Color Filter Generator (Interactive)", "bold", "blue"))
    print()

    while True:
        try:
            text = input(
                style("Enter a color", "bold") + style(" (hex or rgb, or 'q' to quit): ", "dim")
            ).strip()
        except EOFError:
            print()
            return

        if text.lower() == "q":
            print(style("[OK]", "green", "bold") + " Goodbye!")
            return
        if not text:
            continue

        try:
            process_color(text, solver, copy=copy)
        except InvalidColorFormat as e:
            print(style("Error:", "red", "bold") + f" {e}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cssfilter",
        description="Generate CSS filter values to transform black elements into any target color.",
        epilog=(
            "examples:\n"
            '  cssfilter "#FF5733"\n'
            "  cssfilter ff5733\n"
            '  cssfilter "255,87,51"\n'
            "  cssfilter -i\n\n"
            "Uses SPSA (Simultaneous Perturbation Stochastic Approximation) to find\n"
            "filter combinations that minimize color difference in RGB and HSL."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "color",
        nargs="?",
        help="hex color (e.g. #FF0000, ff0000, f00) or RGB (e.g. 255,0,0)",
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="interactive mode with colored preview"
    )
    parser.add_argument(
        "-r", "--raw", action="store_true", help="output only the CSS filter (for piping)"
    )
    copy_group = parser.add_mutually_exclusive_group()
    copy_group.add_argument(
        "-c",
        "--copy",
        action="store_true",
        default=None,
        help="copy result to clipboard automatically (default in interactive mode)",
    )
    copy_group.add_argument(
        "--no-copy",
        dest="copy",
        action="store_false",
        default=None,
        help="never copy to the clipboard",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible output")
    config_group = parser.add_mutually_exclusive_group()
    config_group.add_argument(
        "--preset",
        choices=sorted(SOLVER_PRESETS),
        default=None,
        help="solver speed/quality preset",
    )
    config_group.add_argument(
        "--config", metavar="PATH", default=None, help="JSON file with solver settings"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="log progress (-vv for debug)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_config(args: argparse.Namespace) -> SolverConfig | None:
    if args.config:
        return load_solver_json(args.config)
    if args.preset:
        return get_solver_preset(args.preset)
    return None


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    err_style = Style.for_stream(sys.stderr)

    def fail(message: str) -> int:
        print(err_style("Error:", "red", "bold") + f" {message}", file=sys.stderr)
        return 1

    try:
        config = _load_config(args)
    except (OSError, ValueError, KeyError) as e:
        return fail(f"Could not load solver config: {e}")

    solver = FilterSolver(config=config, seed=args.seed)
    copy = args.interactive if args.copy is None else args.copy

    if args.interactive:
        interactive_mode(solver, copy=copy)
        return 0

    if not args.color:
        return fail("No color specified. Use --help for usage information.")

    try:
        process_color(args.color, solver, raw=args.raw, copy=copy)
    except InvalidColorFormat as e:
        return fail(str(e))
    return 0


if __name__ == "__main__":
    sys.exit(main())
