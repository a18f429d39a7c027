from logging import DEBUG as LOG_LEVEL_DEBUG

from multical.converter import CalendarConverter
from multical.exceptions import MulticalError
from multical.logging_setup import setup_logging
from multical.types.calendar_types import CivilDate, CivilDateTime
from multical.utils.validators import is_date_time

SAMPLES = [
    ("2021-03-20", "gregorian", "en_US", "UTC", "khorshidi", "fa_IR", "Asia/Tehran"),
    ("2021-03-21", "gregorian", "en_US", "UTC", "khorshidi", "en_US", "Asia/Tehran"),
    ("2022-03-25T13:47:00", "gregorian", "en_US", "UTC", "khorshidi", "fa_IR", "Asia/Tehran"),
    ("1400-01-01T00:00:01", "khorshidi", "fa_IR", "Asia/Tehran", "gregorian", "en_US", "UTC"),
    ("2023-03-23", "gregorian", "en_US", "Asia/Riyadh", "hijri", "ar_SA", "Asia/Riyadh"),
]


def parse_value(text: str):
    text = text.strip()
    return CivilDateTime.parse(text) if is_date_time(text) else CivilDate.parse(text)


def run(converter: CalendarConverter, line: str) -> str:
    """`<date|date-time> <cal> <locale> <zone> <cal> <locale> <zone>` → converted value and text."""
    parts = line.split()
    if len(parts) != 7:
        raise MulticalError("expected: VALUE CAL LOCALE ZONE CAL LOCALE ZONE")
    value, *args = parts
    out, text = converter.convert(parse_value(value), *args)
    return f"{out}  |  {text}"


def main() -> None:
    setup_logging(
        level=LOG_LEVEL_DEBUG,
        console=True,
        console_truncate_len=1000,
        log_file=None,
    )

    converter = CalendarConverter()

    print("— Samples —")
    for sample in SAMPLES:
        print(f"{' '.join(sample)}\n    → {run(converter, ' '.join(sample))}")

    while True:
        try:
            line = input("\nConvert> ")
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            break
        if line.strip().lower() in {"exit", "quit"}:
            break

        try:
            print(run(converter, line))
        except MulticalError as exc:
            print(f"💥 {exc}")


if __name__ == "__main__":
    main()
