"""
Interactive demo for the walk generator.
Display one walk at a time and step through further walks with the keyboard.
"""

import logging
import random

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from walk_render import render_walk
from walk_types import Boundary, PathNode, Position
from walkgen import (
    ConfigurationError,
    EnumeratorState,
    SearchBudgetExceeded,
    SearchRules,
    SelfAvoidingWalkGenerator,
)


class InteractiveDemo:
    """Interactive demo stepping through generated walks."""

    def __init__(
        self,
        generator: SelfAvoidingWalkGenerator,
        message: str = "",
        fill: str = "‧",
        steps_per_key: int = 20_000,
    ) -> None:
        self.generator = generator
        self.message = message
        self.fill = fill
        self.steps_per_key = steps_per_key
        self.console = Console()
        self.rng = random.Random()
        self.shown: PathNode | None = None
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with board and status."""
        gen = self.generator
        status = Text()
        status.append("Board: ", style="bold")
        status.append(f"{gen.boundary.width}x{gen.boundary.height}, length {gen.length}\n")
        status.append("Walks found: ", style="bold")
        status.append(f"{len(gen.solutions)} (frontier {gen.frontier_size}, expansions {gen.expansions})\n\n")

        if self.shown is None:
            status.append("No walk to show yet\n", style="yellow")
        else:
            board = render_walk(gen.boundary, self.shown, self.message, self.fill, self.rng)
            status.append(Text.from_ansi(board))
            status.append("\n")
            status.append(str(self.shown), style="dim")

        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N - Next walk\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Self-Avoiding Walk Demo", border_style="green", width=80)

    def next_walk(self) -> None:
        """Probe with a bounded budget and show the next walk if one turns up."""
        try:
            found = self.generator.probe(max_steps=self.steps_per_key)
        except SearchBudgetExceeded as e:
            self.status_message = f"… still searching after {e.steps} expansions, press N to continue"
            return

        if found:
            self.shown = self.generator.consume()
            self.status_message = f"✓ Walk #{len(self.generator.solutions)}"
        else:
            self.status_message = "✗ No more walks exist"

    def run(self) -> None:
        """Run the interactive demo."""
        self.next_walk()

        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'n':
                        if self.generator.enumerator.state is EnumeratorState.EXHAUSTED:
                            self.status_message = "✗ Search exhausted"
                        else:
                            self.next_walk()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(argv: list[str]) -> None:
    """Run the demo on a width x height board from corner to corner."""
    width = int(argv[0]) if len(argv) > 0 else 8
    height = int(argv[1]) if len(argv) > 1 else 8
    length = int(argv[2]) if len(argv) > 2 else 27
    message = argv[3] if len(argv) > 3 else ""

    boundary = Boundary(Position(0, 0), Position(width - 1, height - 1))
    try:
        generator = SelfAvoidingWalkGenerator(boundary, length, rules=SearchRules())
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return

    demo = InteractiveDemo(generator, message=message)
    demo.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the first walk
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

        boundary = Boundary(Position(0, 0), Position(7, 7))
        generator = SelfAvoidingWalkGenerator(boundary, 27)
        if generator.probe(max_steps=100_000):
            print(render_walk(boundary, generator.consume(), fill="‧"))
        else:
            print("No walk found")
    else:
        logging.basicConfig(level=logging.ERROR, format='%(levelname)s: %(message)s')
        main(sys.argv[1:])
