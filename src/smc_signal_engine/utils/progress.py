from rich.console import Console
from rich.style import Style
from rich.text import Text
from typing import Dict, Optional
import threading

console = Console()


class AnalysisProgress:
    """Prints per-agent, per-symbol status lines while analyses run."""

    def __init__(self, output: Console | None = None):
        self.console = output or console
        self.agent_status: Dict[str, Dict[str, Optional[str]]] = {}
        self.lock = threading.Lock()
        self.started = False

    def start(self):
        with self.lock:
            self.started = True

    def stop(self):
        with self.lock:
            if self.started:
                self.started = False
                self.agent_status.clear()

    def update_status(self, agent_name: str, symbol: Optional[str] = None, status: str = ""):
        """Record a status change and print it. Silent until start() is called."""
        with self.lock:
            if not self.started:
                return

            info = self.agent_status.setdefault(agent_name, {"status": "", "symbol": None})
            new_symbol = symbol if symbol is not None else info["symbol"]
            new_status = status or info["status"]

            # Only print if something actually changed
            if new_symbol != info["symbol"] or new_status != info["status"]:
                info["symbol"] = new_symbol
                info["status"] = new_status
                self._print_status(agent_name)

    def _print_status(self, agent_name: str):
        info = self.agent_status[agent_name]
        status = info["status"]
        symbol = info["symbol"]
        if not status:
            return

        marker = "⋯"
        style = Style(color="yellow")
        if status.lower() == "done" or "complete" in status.lower():
            style = Style(color="green", bold=True)
            marker = "✓"
        elif "error" in status.lower():
            style = Style(color="red", bold=True)
            marker = "✗"

        agent_display = agent_name.replace("_agent", "").replace("_", " ").title()
        status_text = Text()
        status_text.append(f"{marker} ", style=style)
        status_text.append(f"{agent_display:<15}", style=Style(bold=True))
        if symbol:
            status_text.append(f"[{symbol}] ", style=Style(color="cyan"))
        status_text.append(status, style=style)

        self.console.print(status_text)


# Create a global instance
progress = AnalysisProgress()
