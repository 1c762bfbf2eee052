import argparse
import sys
import logging
from typing import Dict, List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="funscript-kit - inspect, simplify and save .funscript files")
    parser.add_argument('input_path', help='Path to a .funscript file.')
    parser.add_argument('--simplify', type=float, metavar='EPSILON', default=None,
                        help='Simplify the actions with RDP using this distance tolerance.')
    parser.add_argument('--output', '-o', default=None,
                        help='Save the (possibly simplified) document to this .funscript path.')
    parser.add_argument('--plugin-dir', default=None,
                        help='Load user transformation plugins from this directory.')
    parser.add_argument('--apply-plugin', metavar='NAME', default=None,
                        help='Apply the registered transformation plugin with this name.')
    parser.add_argument('--plugin-param', metavar='KEY=VALUE', action='append', default=[],
                        help='Parameter for --apply-plugin (repeatable).')
    parser.add_argument('--video', default=None,
                        help='Also report the sample count of track 1 of this media file.')
    parser.add_argument('--quiet', '-q', action='store_true', help='Do not print the document JSON.')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging.')
    parser.add_argument('--log-file', default=None, help='Also write logs to this file (rotated).')
    return parser


def parse_plugin_params(items: List[str]) -> Dict[str, str]:
    """Turn KEY=VALUE strings into keyword arguments; the plugin converts the value types."""
    parameters = {}
    for item in items:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise ValueError(f"Plugin parameter must be KEY=VALUE, got '{item}'")
        parameters[key] = value
    return parameters


def run_cli(args) -> int:
    """Runs the load / simplify / print / save workflow. Returns the process exit code."""
    from common.exceptions import FunscriptException
    from funscript import load, save, simplify, to_pretty_json
    from funscript.plugins.plugin_loader import ensure_plugins_loaded, plugin_loader
    from video import get_track_sample_count

    logger = logging.getLogger(__name__)

    try:
        document = load(args.input_path)

        if args.plugin_dir:
            ensure_plugins_loaded()
            plugin_loader.load_plugins_from_directory(args.plugin_dir)

        if args.apply_plugin:
            parameters = parse_plugin_params(args.plugin_param)
            if not document.apply_plugin(args.apply_plugin, **parameters):
                return 1

        if args.simplify is not None:
            simplify(document, args.simplify)

        if not args.quiet:
            print(to_pretty_json(document))

        if args.output:
            save(args.output, document)

        if args.video:
            sample_count = get_track_sample_count(args.video)
            print(f"Samples in track 1 of {args.video}: {sample_count}")
    except (FunscriptException, OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to run the command line tool.
    """
    args = build_parser().parse_args(argv)

    from application.utils.logger import AppLogger
    AppLogger(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    return run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
