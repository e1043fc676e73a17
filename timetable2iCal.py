#!/usr/bin/env python3
"""Module timetable to iCalendar converter.

Pipeline that reads module data and a timetable selection, builds
weekly recurring lesson and exam events and writes an iCalendar (.ics)
file.
"""

import argparse
import sys

from timetable import CalendarConfig, build_timetable, load_config, load_modules, load_selection
from transformer import ICalTransformer, events_for_timetable


def main() -> None:
    """Main entry point for the converter."""
    parser = argparse.ArgumentParser(
        description="Convert a module timetable to iCalendar format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 timetable2iCal.py --modules modules.json --timetable selection.json --semester 1
  python3 timetable2iCal.py --modules modules.json --timetable selection.json --semester 2 \\
      --academic-year 2024/2025 --hide GEA1000 --output my_timetable.ics
        """
    )

    parser.add_argument(
        "--modules",
        required=True,
        help="JSON file with module data (NUSMods API format)"
    )

    parser.add_argument(
        "--timetable",
        required=True,
        help="JSON file mapping module codes to {lesson type: class number}"
    )

    parser.add_argument(
        "--semester",
        type=int,
        choices=[1, 2, 3, 4],
        required=True,
        help="Semester to export (3 and 4 are the special terms)"
    )

    parser.add_argument(
        "--academic-year",
        default="",
        help="Academic year, e.g. 2025/2026 (default: from calendar settings)"
    )

    parser.add_argument(
        "--hide",
        nargs="*",
        default=[],
        metavar="MODULE",
        help="Module codes to leave out of the calendar"
    )

    parser.add_argument(
        "--config",
        default=None,
        help="JSON file overriding holidays and the academic calendar"
    )

    parser.add_argument(
        "-o", "--output",
        default="timetable.ics",
        help="Output file path (default: timetable.ics)"
    )

    args = parser.parse_args()

    # Ensure output file has .ics extension
    output_path = args.output
    if not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    try:
        config = load_config(args.config) if args.config else CalendarConfig()
        academic_year = args.academic_year or config.academic_year

        modules = load_modules(args.modules)
        timetable = build_timetable(load_selection(args.timetable), modules, args.semester)
        module_data = {code: record.module for code, record in modules.items()}

        events = events_for_timetable(
            args.semester,
            timetable,
            module_data,
            args.hide,
            config,
            academic_year,
        )

        print(f"Found {len(events)} calendar events.")

        if not events:
            print("Warning: No events found. The output file will be empty.")

        transformer = ICalTransformer(
            calendar_name=f"AY{academic_year} Sem {args.semester}",
            timezone_name=config.timezone_name,
        )
        transformer.transform(events)
        transformer.save(output_path)

        print(f"Timetable saved to: {output_path}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
