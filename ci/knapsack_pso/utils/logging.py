# ci/knapsack_pso/utils/logging.py
import logging
from colorama import init, Fore, Back, Style
from tabulate import tabulate
from typing import Any, Dict, List, Optional

# Initialize colorama
init(autoreset=True)

LOG_FORMAT = "[%(asctime)s] %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ColorFormatter(logging.Formatter):
    COLORS = {
        'INFO': Fore.CYAN,
        'DEBUG': Fore.BLUE,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Back.RED + Fore.WHITE
    }

    def format(self, record):
        # color a copy so other handlers (file) still get plain text
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, Fore.WHITE)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        record.name = f"{Fore.MAGENTA}{record.name}{Style.RESET_ALL}"
        return super().format(record)


def get_logger(name: str = "knapsack_pso", level: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)

    # Console handler with color
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    # File handler (no color)
    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def _colorize(key: str, value: Any) -> str:
    if key == 'feasible':
        return f"{Fore.GREEN if value else Fore.RED}{value}{Style.RESET_ALL}"
    if key in ('best_fitness', 'total_value'):
        return f"{Fore.BLUE}{value:.2f}{Style.RESET_ALL}"
    if key == 'time_sec':
        return f"{Fore.MAGENTA}{value:.2f}s{Style.RESET_ALL}"
    if key == 'method':
        return f"{Fore.CYAN}{value}{Style.RESET_ALL}"
    return str(value)


def format_results_table(results: List[Dict[str, Any]], color: bool = True) -> str:
    """Render result rows (dicts with the same keys) as a grid table."""
    if not results:
        return ""
    headers = list(results[0].keys())
    rows = [
        [_colorize(k, row.get(k)) if color else row.get(k) for k in headers]
        for row in results
    ]
    return tabulate(rows, headers=headers, tablefmt="fancy_grid")


def print_results_table(results, title="RESULTS"):
    """Print a table of results"""
    print(f"\n{Fore.CYAN}{'═' * 60}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{title:^60}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{'═' * 60}{Style.RESET_ALL}")

    if not results:
        print(f"{Fore.YELLOW}No results to display{Style.RESET_ALL}")
        return

    print(format_results_table(results))


def print_experiment_header(problem_name, run_num, total_runs):
    """Print experiment header"""
    print(f"\n{Fore.GREEN}{'─' * 60}{Style.RESET_ALL}")
    print(f"{Fore.GREEN}Experiment {run_num}/{total_runs}: {problem_name}{Style.RESET_ALL}")
    print(f"{Fore.GREEN}{'─' * 60}{Style.RESET_ALL}")
