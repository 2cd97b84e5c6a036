"""Command line interface."""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from perceptive.config import load_config, override_config
from perceptive.duplicates import find_duplicates, hash_images
from perceptive.errors import PerceptiveError
from perceptive.features.phash import compute_hash, format_hash
from perceptive.io import iter_image_paths, load_image
from perceptive.logging_utils import setup_logging
from perceptive.similarity import classify_distance, compare_images

logger = logging.getLogger(__name__)

KIND_CHOICES = ["average", "difference", "ahash", "dhash"]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="perceptive")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    parser.add_argument("--log-level", default=None, help="Logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    hash_parser = subparsers.add_parser("hash", help="Print fingerprints of images")
    hash_parser.add_argument("images", nargs="+")
    hash_parser.add_argument("--kind", choices=KIND_CHOICES)

    compare_parser = subparsers.add_parser("compare", help="Hamming distance between two images")
    compare_parser.add_argument("image_a")
    compare_parser.add_argument("image_b")
    compare_parser.add_argument("--kind", choices=KIND_CHOICES)

    dup_parser = subparsers.add_parser("duplicates", help="Find near-duplicate images in a directory")
    dup_parser.add_argument("directory")
    dup_parser.add_argument("--kind", choices=KIND_CHOICES)
    dup_parser.add_argument("--threshold", type=int)
    dup_parser.add_argument("--batch-size", type=int)

    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
        cfg = override_config(
            cfg,
            {
                "hash_kind": args.kind,
                "log_level": args.log_level,
                "duplicate_threshold": getattr(args, "threshold", None),
                "batch_size": getattr(args, "batch_size", None),
            },
        )
        setup_logging(cfg.log_level)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"perceptive: {exc}", file=sys.stderr)
        return 2

    try:
        if args.command == "hash":
            for path in args.images:
                value = compute_hash(load_image(path), cfg.hash_kind)
                print(f"{format_hash(value)}\t{value}\t{path}")
        elif args.command == "compare":
            dist = compare_images(load_image(args.image_a), load_image(args.image_b), cfg.hash_kind)
            print(f"{dist}\t{classify_distance(dist, cfg.variant_threshold)}")
        elif args.command == "duplicates":
            hashes = hash_images(iter_image_paths(args.directory), cfg.hash_kind, cfg.batch_size)
            for path_a, path_b, dist in find_duplicates(hashes, cfg.duplicate_threshold):
                print(f"{dist}\t{path_a}\t{path_b}")
    except (PerceptiveError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
