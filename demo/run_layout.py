"""
Lay out an elevator morphism headlessly and print a JSON summary.

    python -m demo.run_layout --morphism moveDown --frames 300 --seed 1 --pin f2
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

import numpy as np

from forcelayout import FrameClock, ParameterStore, couple_engines
from graphcore import LayoutAuditLog, Side
from graphcore.morphism import GraphMorphism
from .elevator import MORPHISM_NAMES, elevator_morphism


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Coupled force layout of an elevator morphism")
    parser.add_argument("--morphism", default="moveDown", choices=MORPHISM_NAMES, help="Morphism to lay out")
    parser.add_argument("--frames", type=int, default=300, help="Maximum number of frames")
    parser.add_argument("--width", type=float, default=500.0, help="Viewport width")
    parser.add_argument("--height", type=float, default=500.0, help="Viewport height")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the jiggle generator")
    parser.add_argument("--pin", action="append", default=[], metavar="NODE_ID",
                        help="Pin a domain node (repeatable)")
    parser.add_argument("--verbose", action="store_true", help="Log engine lifecycle")
    return parser


def summarize(morphism: GraphMorphism, frames: int, audit_log: LayoutAuditLog) -> Dict:
    def side(graph, which: Side) -> Dict:
        classes = morphism.classes(which)
        return {
            "positions": {
                node.id: [round(node.x, 3), round(node.y, 3)] for node in graph.iter_nodes()
            },
            "pinned": [node.id for node in graph.iter_nodes() if node.is_pinned],
            "classes": {
                "nodes": dict(classes.nodes),
                "edges": {str(k): v for k, v in classes.edges.items()},
            },
        }

    return {
        "frames": frames,
        "num_mapped_elements": morphism.num_mapped_elements,
        "domain": side(morphism.domain, Side.DOMAIN),
        "codomain": side(morphism.codomain, Side.CODOMAIN),
        "events": {t.value: n for t, n in audit_log.count_by_type().items()},
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    morphism = elevator_morphism(args.morphism)
    for node_id in args.pin:
        morphism.domain.node(node_id).pin()

    audit_log = LayoutAuditLog()
    domain, codomain = couple_engines(
        ParameterStore(), morphism, args.width, args.height,
        rng=np.random.default_rng(args.seed), audit_log=audit_log
    )
    clock = FrameClock.of([domain, codomain])
    frames = clock.run_until_settled(args.frames)

    json.dump(summarize(morphism, frames, audit_log), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
