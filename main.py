# Main.py
""""" Entry point for the measurement calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration, then evaluate one expression or run a prompt

"""""
import sys
import argparse
from pathlib import Path

import pyperclip

from woodcalc import config_manager as config_manager, MathEngine as MathEngine
from woodcalc import error as E


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
    """

    package_dir = PROJECT_ROOT / "woodcalc"

    REQUIRED = [
        package_dir / "MathEngine.py",
        package_dir / "UnitEngine.py",
        package_dir / "FractionMath.py",
        package_dir / "ResultFormatter.py",
        package_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(description="Exact feet/inch and metric measurement calculator.")
    parser.add_argument("expression", nargs="*", help="expression to evaluate, e.g. 5' 3 1/2\" + 7/8")
    parser.add_argument("--units", help="imperial, imperial-inches, metric-mm or metric-cm")
    parser.add_argument("--precision", help="2, 4, 8, 16, 32 or exact")
    return parser


def resolve_settings(args, settings):
    """Apply command line overrides on top of the loaded settings."""
    unit_system = settings.unit_system
    precision = settings.fraction_precision

    if args.units:
        unit_system = config_manager.parse_unit_system(args.units)
    if args.precision:
        precision = config_manager.parse_precision(args.precision)

    return unit_system, precision


def copy_result(text):
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        print(f"Warning: could not copy result to clipboard ({e})")


def run_once(expression, unit_system, precision, copy_to_clipboard=False):
    calculation = MathEngine.calculate(expression, unit_system, precision)
    print(calculation.display)

    if copy_to_clipboard and calculation.result is not None:
        copy_result(calculation.result.text)

    return calculation


def prompt_loop(unit_system, precision, copy_to_clipboard=False):
    print(f"Units: {unit_system.value}, precision: {precision}. Empty line quits.")
    while True:
        try:
            expression = input("> ")
        except EOFError:
            break
        if not expression.strip():
            break
        run_once(expression, unit_system, precision, copy_to_clipboard)


def main(argv=None):

    """
    Load configuration and evaluate.
    - Keep this thin: no business logic here.
    """

    args = build_parser().parse_args(argv)

    try:
        settings = config_manager.load_settings()
        unit_system, precision = resolve_settings(args, settings)
    except E.ConfigurationError as e:
        print(f"Configuration error {e.code}: {e.message}")
        return 2

    MathEngine.debug = settings.debug
    if settings.debug:
        print("Config loaded:", config_manager.settings_to_dict(settings))

    if args.expression:
        calculation = run_once(" ".join(args.expression), unit_system, precision, settings.copy_to_clipboard)
        return 0 if calculation.error is None else 1

    prompt_loop(unit_system, precision, settings.copy_to_clipboard)
    return 0


def start(argv=None):
    # Two explicit modes aid debugging & packaging clarity.
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    return main(argv)


if __name__ == "__main__":
    sys.exit(start())
