import argparse
import json
import logging
import sys
from pathlib import Path

from geoparse_pipeline.config import PipelineConfig
from geoparse_pipeline.pipeline import GeoParser


def main(argv=None):
    parser = argparse.ArgumentParser(description="Geoparse text with a configurable pipeline.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to pipeline config JSON file.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Log how many places each disambiguation pass resolved.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Parse plain text files (stdin if none).")
    parse_cmd.add_argument("input", nargs="*", help="Input text file paths.")

    sentences_cmd = sub.add_parser("sentences", help="Parse a JSON list of sentences.")
    sentences_cmd.add_argument("input", help="JSON file with sentence objects.")

    entities_cmd = sub.add_parser("entities", help="Resolve pre-extracted entities JSON.")
    entities_cmd.add_argument("input", help="JSON file with extracted entities.")

    geoname_cmd = sub.add_parser("geoname", help="Look up a gazetteer record by id.")
    geoname_cmd.add_argument("id", type=int)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
    )

    config_data = json.loads(Path(args.config).read_text(encoding="utf-8"))
    config = PipelineConfig.from_dict(config_data)
    geoparser = GeoParser.from_config(config)

    if args.command == "parse":
        if args.input:
            results = [geoparser.parse_text(Path(p).read_text(encoding="utf-8")) for p in args.input]
        else:
            results = [geoparser.parse_text(sys.stdin.read())]
    elif args.command == "sentences":
        results = [geoparser.parse_sentences(Path(args.input).read_text(encoding="utf-8"))]
    elif args.command == "entities":
        results = [geoparser.parse_entities_json(Path(args.input).read_text(encoding="utf-8"))]
    else:
        results = [geoparser.geoname_info(args.id)]

    for result in results:
        print(json.dumps(result))

    if args.stats:
        geoparser.log_stats()


if __name__ == "__main__":
    main()
