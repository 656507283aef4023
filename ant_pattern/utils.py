"""
Utility-Funktionen für die Terminal-Ausgabe
"""

import sys
from typing import List

# Terminal Colors
YELLOW = "\033[93m"
RED = "\033[91m"
GREEN = "\033[92m"
BLUE = "\033[94m"
BOLD = "\033[1m"
RESET = "\033[0m"


def print_message(message: str):
    """Hinweis (Diagramm trotzdem verwendbar)."""
    print(f"{YELLOW}⚠️  {message}{RESET}")


def print_error(message: str):
    """Fehler (Diagramm verworfen)."""
    print(f"{RED}{BOLD}❌ {message}{RESET}")


def print_ok(message: str):
    print(f"{GREEN}✓ {message}{RESET}")


def _banner(title: str, color: str):
    print(f"{color}{BOLD}{'=' * 60}{RESET}")
    print(f"{color}{BOLD}{title}{RESET}")
    print(f"{color}{BOLD}{'=' * 60}{RESET}")


def warn_advisories(antenna_id: str, messages: List[str]):
    """
    Zeigt die Hinweise zu einem gültigen Diagramm an.

    Args:
        antenna_id: ID des Antennendatensatzes
        messages: Formatierte Hinweise aus dem ErrorLogger
    """
    print()
    _banner(f"⚠️  Diagramm {antenna_id}: {len(messages)} Hinweis(e)", YELLOW)
    for message in messages:
        print(f"  - {message}")
    print()
    print(f"{BLUE}💡 Quelldaten prüfen: dB-Werte statt relativer Feldstärke, "
          f"Maximum unter 1.0{RESET}")
    print()


def error_and_exit(message: str, exit_code: int = 1):
    """
    Meldet einen fatalen Fehler und beendet das Programm.

    Args:
        message: Fehlermeldung (Grund und Fundstelle)
        exit_code: Exit-Code (default: 1)
    """
    print()
    _banner("❌ Diagramm verworfen", RED)
    print(f"  {message}")
    print()
    sys.exit(exit_code)
