"""CLI interface for FaqBot"""

import sys
import time
import threading
import argparse
import logging
import textwrap
from pathlib import Path
from typing import Optional

from colorama import init, Fore, Style

from . import config, __version__, __author__, __powered_by__
from .knowledge import (
    KnowledgeStoreError,
    load_knowledge_base,
    load_or_seed,
    save_knowledge_base,
)
from .matcher import ChatbotCore

# Initialize colorama for Windows support
init(autoreset=True)

logger = logging.getLogger(__name__)


# ── Typewriter helper ────────────────────────────────────────────────────────
def _typewrite(text: str, color: str = Fore.WHITE, delay: Optional[float] = None, end: str = '\n'):
    """Print text with a typewriter effect, one character at a time."""
    if delay is None:
        delay = config.TYPEWRITER_DELAY
    # Long texts print faster
    if len(text) > 200:
        delay /= 2
    sys.stdout.write(color)
    sys.stdout.flush()
    for ch in text:
        sys.stdout.write(ch)
        sys.stdout.flush()
        if delay:
            time.sleep(delay)
    sys.stdout.write(Style.RESET_ALL + end)
    sys.stdout.flush()


# ── Thinking indicator ───────────────────────────────────────────────────────
class _ThinkingIndicator:
    """
    Pulses "<bot> is thinking..." on one line while a reply is computed.

    Stays up for at least `min_duration` seconds so instant answers still
    get a short pause before they print.
    """

    def __init__(self, min_duration: float = 0.0, color: str = Fore.CYAN):
        self.text = f"{config.CLI_ASSISTANT} is thinking"
        self.min_duration = min_duration
        self.color = color
        self._done = threading.Event()
        self._worker = threading.Thread(target=self._pulse, daemon=True)
        self._started = 0.0

    def _pulse(self):
        dots = 0
        while not self._done.is_set():
            dots = dots % 3 + 1
            sys.stdout.write(f"\r{self.color}  {self.text}{'.' * dots:<3}{Style.RESET_ALL}")
            sys.stdout.flush()
            self._done.wait(0.2)

    def __enter__(self):
        self._started = time.monotonic()
        self._worker.start()
        return self

    def __exit__(self, *_):
        remaining = self.min_duration - (time.monotonic() - self._started)
        if remaining > 0:
            time.sleep(remaining)
        self._done.set()
        self._worker.join()
        sys.stdout.write('\r' + ' ' * (len(self.text) + 8) + '\r')
        sys.stdout.flush()


class FaqBotCLI:
    """Interactive CLI for the FaqBot responder"""

    def __init__(self, kb_file: Optional[Path] = None):
        self.kb_file = Path(kb_file or config.KNOWLEDGE_BASE_FILE)
        self.bot: Optional[ChatbotCore] = None
        self.running = False

    def print_banner(self):
        """Print welcome banner."""
        W = config.CLI_WIDTH

        def _row(label: str, value: str, vcol: str) -> str:
            inner = f"  {Fore.WHITE}{label}{vcol}{value}"
            pad   = W - 2 - len(label) - len(value)
            return f"{Fore.MAGENTA}║{inner}{' ' * max(pad, 0)}{Fore.MAGENTA}║{Style.RESET_ALL}"

        title_text = '·  F a q B o t  ·'
        sub_text   = 'Ask me a question, or teach me a new one'

        lines = [
            "",
            f"{Fore.MAGENTA}╔{'═' * W}╗{Style.RESET_ALL}",
            f"{Fore.MAGENTA}║{Fore.CYAN + Style.BRIGHT}{title_text:^{W}}{Style.RESET_ALL}{Fore.MAGENTA}║{Style.RESET_ALL}",
            f"{Fore.MAGENTA}║{Fore.YELLOW}{sub_text:^{W}}{Style.RESET_ALL}{Fore.MAGENTA}║{Style.RESET_ALL}",
            f"{Fore.MAGENTA}║{'─' * W}║{Style.RESET_ALL}",
            _row("Version       : ", f"v{__version__}", Fore.WHITE),
            _row("Knowledge     : ", str(self.kb_file)[:W - 20], Fore.GREEN),
            f"{Fore.MAGENTA}╚{'═' * W}╝{Style.RESET_ALL}",
            "",
        ]
        for line in lines:
            print(line)

    def print_help(self):
        """Print the command table."""
        bar = f"{Fore.CYAN}{'─' * 60}{Style.RESET_ALL}"
        print(f"\n{bar}")
        print(f"{Fore.CYAN + Style.BRIGHT}  Commands{Style.RESET_ALL}")
        print(bar)

        for cmd, desc in [
            ("help",    "Show this help message"),
            ("train",   "Teach me a new question and answer"),
            ("kb",      "List everything I know"),
            ("save",    "Save my knowledge to disk"),
            ("load",    "Load my knowledge from disk"),
            ("clear",   "Clear the screen"),
            ("version", "Show version and credits"),
            ("quit",    "Exit the application"),
        ]:
            print(f"  {Fore.GREEN}{cmd:<10}{Style.RESET_ALL}{Fore.WHITE}{desc}{Style.RESET_ALL}")

        print("\n  Anything else is treated as a question.")
        print(f"{bar}\n")

    def print_response(self, text: str):
        """Print a bot reply with a typewriter body."""
        label = f"{Fore.GREEN + Style.BRIGHT}  {config.CLI_ASSISTANT}:{Style.RESET_ALL}"
        print(label)
        for raw_line in text.splitlines():
            for line in textwrap.wrap(raw_line, width=88) or [""]:
                _typewrite(f"  {line}", Fore.WHITE)
        print()

    def print_error(self, error: str):
        """Print error message."""
        print(f"\n{Fore.RED}  ✗  {error}{Style.RESET_ALL}\n")

    def get_input(self, prompt_text: str = config.CLI_PROMPT) -> str:
        """Get user input with styled prompt."""
        try:
            prompt = (
                f"{Fore.LIGHTMAGENTA_EX + Style.BRIGHT}  {prompt_text} {Style.RESET_ALL}"
                f"{Fore.LIGHTMAGENTA_EX}›{Style.RESET_ALL} "
            )
            return input(prompt).strip()
        except (KeyboardInterrupt, EOFError):
            return "quit"

    def initialize(self):
        """Load saved knowledge (or the starter FAQ) and build the responder."""
        kb = load_or_seed(self.kb_file)
        self.bot = ChatbotCore(kb)
        return self.bot

    def answer(self, text: str) -> str:
        """Reply to free text behind the thinking indicator."""
        with _ThinkingIndicator(min_duration=config.THINKING_DELAY):
            return self.bot.respond(text)

    # ── commands ─────────────────────────────────────────────────────────
    def train(self):
        question = input(f"{Fore.CYAN}  Question: {Style.RESET_ALL}").strip()
        answer = input(f"{Fore.CYAN}  Answer: {Style.RESET_ALL}").strip()
        try:
            self.bot.teach(question, answer)
        except ValueError:
            self.print_error("Both question and answer are required.")
            return
        self.print_response("Thanks, I've learned a new Q/A pair.")

    def show_kb(self):
        pairs = self.bot.kb.all()
        if not pairs:
            print(f"{Fore.YELLOW}  My knowledge base is empty.{Style.RESET_ALL}\n")
            return
        print()
        for i, pair in enumerate(pairs, 1):
            print(f"  {Fore.GREEN}{i}) Q: {Style.RESET_ALL}{pair.question}")
            print(f"     {Fore.WHITE}A: {pair.answer}{Style.RESET_ALL}")
        print()

    def save(self):
        try:
            path = save_knowledge_base(self.bot.kb, self.kb_file)
        except KnowledgeStoreError as e:
            self.print_error(f"Save failed: {e}")
            return
        self.print_response(f"Knowledge saved to disk ({path}).")

    def load(self):
        try:
            kb = load_knowledge_base(self.kb_file)
        except KnowledgeStoreError as e:
            self.print_error(f"Load failed: {e}")
            return
        self.bot.set_knowledge_base(kb)
        self.print_response("Knowledge loaded from disk.")

    def clear_screen(self):
        sys.stdout.write("\033[2J\033[H")
        sys.stdout.flush()

    def handle_command(self, command: str):
        """
        Handle special commands.
        Returns True to continue, False to exit, None if not a command.
        """
        cmd = command.lower()

        if cmd in ('quit', 'exit', 'q'):
            _typewrite("\n  Goodbye! 👋", Fore.MAGENTA)
            return False

        handlers = {
            'help': self.print_help,
            'train': self.train,
            'kb': self.show_kb,
            'save': self.save,
            'load': self.load,
            'clear': self.clear_screen,
            'version': self.print_version,
        }
        handler = handlers.get(cmd)
        if handler is None:
            return None  # Not a command
        handler()
        return True

    def run(self):
        """Main CLI loop."""
        self.print_banner()
        self.print_help()
        self.initialize()
        self.print_response(
            "Hello! I'm a simple FAQ chatbot. Ask me something, or type 'help' to train/save/load."
        )

        self.running = True
        while self.running:
            try:
                user_input = self.get_input()
                if not user_input:
                    continue

                result = self.handle_command(user_input)
                if result is False:
                    break
                if result is True:
                    continue

                self.print_response(self.answer(user_input))

            except KeyboardInterrupt:
                print(f"\n{Fore.YELLOW}  Use 'quit' to exit.{Style.RESET_ALL}\n")
            except Exception as e:
                self.print_error(f"Unexpected error: {e}")
                logger.exception("Unexpected error in main loop")

    def print_version(self):
        """Print version and credits."""
        print()
        print(f"  {Fore.CYAN + Style.BRIGHT}FaqBot v{__version__}{Style.RESET_ALL}")
        print(f"  {Fore.GREEN}Developer : {__author__}{Style.RESET_ALL}")
        print(f"  {Fore.CYAN}Powered by: {__powered_by__}{Style.RESET_ALL}")
        print()


def _enable_verbose_logging():
    """Send DEBUG records from the package to stderr, whatever the root logger does."""
    pkg_logger = logging.getLogger("faqbot")
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    for name in ("faqbot", "faqbot.knowledge", "faqbot.matcher", "faqbot.cli"):
        logging.getLogger(name).setLevel(logging.DEBUG)


def main(argv=None):
    """Main entry point - supports --version, --about, --ask and interactive mode"""
    parser = argparse.ArgumentParser(
        prog="faqbot",
        description="FaqBot - a small FAQ chatbot you can teach",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"Developed by: {__author__}\n"
            f"Version:      {__version__}"
        ),
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"FaqBot v{__version__}",
    )
    parser.add_argument(
        "--about",
        action="store_true",
        help="Show detailed about information and exit",
    )
    parser.add_argument(
        "--kb-file",
        type=Path,
        default=None,
        help=f"Knowledge base file (default: {config.KNOWLEDGE_BASE_FILE})",
    )
    parser.add_argument(
        "--ask",
        metavar="TEXT",
        help="Answer a single question and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        _enable_verbose_logging()

    if args.about:
        print(f"{Fore.CYAN}FaqBot{Style.RESET_ALL}")
        print("  Deterministic FAQ matching, no network, no models")
        print(f"  {Fore.GREEN}Version   : {__version__}{Style.RESET_ALL}")
        print(f"  {Fore.BLUE}Powered by: {__powered_by__}{Style.RESET_ALL}")
        print(f"\n  Run {Fore.YELLOW}faqbot{Style.RESET_ALL} to start the interactive assistant.")
        return

    cli = FaqBotCLI(kb_file=args.kb_file)

    if args.ask is not None:
        cli.initialize()
        print(cli.bot.respond(args.ask))
        return

    try:
        cli.run()
    except Exception as e:
        print(f"{Fore.RED}Fatal error: {e}{Style.RESET_ALL}")
        logging.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
