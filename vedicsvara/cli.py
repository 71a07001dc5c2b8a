#!/usr/bin/env python3
"""
VedicSvara - Command Line

    vedicsvara "agnímīḷe" --ritual
    vedicsvara "deva" --subrahmanya
    vedicsvara "â" --decompose
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .aggregator import AggregateOptions, ProsodyEngine
from .config import EngineConfig
from .duration_model import DurationModel, MatraCalibration, SvaritaDecomposer

logger = logging.getLogger("vedicsvara")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vedicsvara",
        description="Resolve Vedic pitch accent and ekaśruti (monotone) recitation",
    )
    parser.add_argument("text", help="IAST or Devanagari text")
    parser.add_argument("--case", help="Grammatical case, e.g. vocative")
    parser.add_argument("--distance", choices=["far", "near"], help="Distance category of the address")
    parser.add_argument("--distance-meters", type=float, help="Distance of the address in meters")
    parser.add_argument("--ritual", action="store_true", help="Ritual (yajña) recitation")
    parser.add_argument("--japa", action="store_true", help="Meditative repetition")
    parser.add_argument("--sama", action="store_true", help="Sāman chant")
    parser.add_argument("--compound-initial", action="store_true", help="Stressed compound-initial word")
    parser.add_argument("--chandas", action="store_true", help="Metrical verse")
    parser.add_argument("--meter", help="Metre name, e.g. gāyatrī")
    parser.add_argument("--subrahmanya", action="store_true", help="Subrahmaṇyā hymn domain")
    parser.add_argument("--assume-domain", action="store_true",
                        help="Treat the text as hymn-lexicon text without a context flag")
    parser.add_argument("--decompose", action="store_true",
                        help="Decompose a single svarita vowel instead of aggregating")
    parser.add_argument("--matra-ms", type=float, default=DurationModel.DEFAULT_MATRA_MS,
                        help="Mātrā length used for --decompose timings")
    parser.add_argument("--config", type=Path, help="JSON configuration overlay")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def context_from_args(args: argparse.Namespace) -> dict:
    context = {
        "case": args.case,
        "distanceCategory": args.distance,
        "distanceMeters": args.distance_meters,
        "ritual": args.ritual,
        "japa": args.japa,
        "sama": args.sama,
        "compound_initial": args.compound_initial,
        "chandas": args.chandas,
        "meter": args.meter,
        "subrahmanya": args.subrahmanya,
    }
    return {key: value for key, value in context.items() if value not in (None, False)}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.matra_ms <= 0:
        parser.error("--matra-ms must be positive")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = EngineConfig.from_json(args.config) if args.config else EngineConfig()
    except ValueError as e:
        logger.error("%s", e)
        return 2

    if args.decompose:
        decomposition = SvaritaDecomposer().decompose(args.text)
        output = decomposition.to_dict()
        if decomposition.applies:
            model = DurationModel(MatraCalibration("cli", args.matra_ms))
            output["timings_ms"] = [
                {"role": t.role, "start": round(t.start_ms, 1), "end": round(t.end_ms, 1)}
                for t in model.segment_timings(decomposition)
            ]
        print(json.dumps(output, ensure_ascii=False, indent=2))
        return 0 if decomposition.applies else 1

    engine = ProsodyEngine(config)
    result = engine.aggregate(
        args.text,
        context_from_args(args),
        AggregateOptions(assume_domain=args.assume_domain),
    )
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
