import argparse
import logging
import sys

from colorist import Color

from pitlights.adapters import CsvAdapter
from pitlights.client import LightsClient
from pitlights.config import OUTPUT_FORMATS, SLOT_ORDERS, LightsConfig
from pitlights.errors import PitLightsError

def parse_args(argv=None) -> argparse.Namespace:
    defaults = LightsConfig()
    parser = argparse.ArgumentParser(prog="pitlights",
                                     description="Build an LED track animation buffer from driver position telemetry")
    parser.add_argument("-i", "--input", default=defaults.input_path, help="telemetry CSV, or - for stdin")
    parser.add_argument("-o", "--output", help="defaults to output.json, or output.txt for --format const")
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default=defaults.output_format)
    parser.add_argument("--frames", type=int, default=defaults.frame_count)
    parser.add_argument("--slots", type=int, default=defaults.slot_count)
    parser.add_argument("--interval", type=int, default=defaults.update_interval_ms, help="milliseconds per frame")
    parser.add_argument("--slot-order", choices=SLOT_ORDERS, default=defaults.slot_order)
    parser.add_argument("--skip-malformed", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)

def config_from_args(args: argparse.Namespace) -> LightsConfig:
    output = args.output
    if output is None:
        output = "output.txt" if args.format == "const" else "output.json"

    return LightsConfig(input_path=args.input,
                        output_path=output,
                        frame_count=args.frames,
                        slot_count=args.slots,
                        update_interval_ms=args.interval,
                        output_format=args.format,
                        slot_order=args.slot_order,
                        skip_malformed=args.skip_malformed)

def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s %(name)s: %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    config = config_from_args(args)
    try:
        config.validate()
    except ValueError as e:
        print(f"{Color.RED}{e}{Color.OFF}", file=sys.stderr)
        return 2

    adapter = CsvAdapter(config.input_path, config.skip_malformed)
    client = LightsClient(adapter, config)
    try:
        buffer = client.go()
    except (PitLightsError, OSError) as e:
        logging.getLogger(__name__).error("Build failed: %s", e)
        print(f"{Color.RED}Build failed: {e}{Color.OFF}", file=sys.stderr)
        return 1

    filled = sum(1 for frame in buffer.frames if not frame.is_empty())
    print(f"{Color.GREEN}Wrote {len(buffer.frames)} frames ({filled} with drivers) to {config.output_path}{Color.OFF}")
    if adapter.skipped > 0:
        print(f"{Color.YELLOW}Skipped {adapter.skipped} malformed rows{Color.OFF}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
