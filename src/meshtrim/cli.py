"""Command-line trim classifier.

Example
=======

.. code-block:: bash

    meshtrim-classify gesture.yaml mesh.json --json

``mesh.json`` holds ``{"vertices": [[x, y, z], ...], "faces": [[a, b, c], ...]}``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from meshtrim.classify import classify_mesh
from meshtrim.config import border_from_config, load_gesture

logger = logging.getLogger(__name__)


def _load_mesh(path: Path):
    with path.open('r', encoding='utf-8') as fp:
        doc = json.load(fp)
    if not isinstance(doc, dict) or 'vertices' not in doc:
        raise ValueError(f'{path}: mesh document needs a "vertices" list')
    vertices, faces = doc['vertices'], doc.get('faces', [])
    if not isinstance(vertices, list):
        raise ValueError(f'{path}: "vertices" must be a list, got {type(vertices).__name__}')
    if not isinstance(faces, list):
        raise ValueError(f'{path}: "faces" must be a list, got {type(faces).__name__}')
    return vertices, faces


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify mesh vertices and faces against a screen-space trim gesture.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("gesture", type=Path, help="YAML gesture file (camera + screen points)")
    parser.add_argument("mesh", type=Path, help="JSON mesh with vertices and faces")
    parser.add_argument("--json", action="store_true", help="Emit the summary as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_gesture(args.gesture)
        vertices, faces = _load_mesh(args.mesh)
        border = border_from_config(config)
        result = classify_mesh(border, vertices, faces)
    except (OSError, ValueError) as exc:
        print(f"meshtrim-classify: {exc}", file=sys.stderr)
        return 2

    summary = result.summary()
    summary["segments"] = border.num_segments()
    summary["only_obtuse_angles"] = border.only_obtuse_angles()
    logger.info("classified %d vertices and %d faces", summary["vertices"], summary["faces"])

    if args.json:
        summary["kept_faces"] = [int(i) for i in result.kept_faces()]
        print(json.dumps(summary, indent=2))
    else:
        lines = [
            f"segments:            {summary['segments']}",
            f"obtuse chain:        {'yes' if summary['only_obtuse_angles'] else 'no'}",
            f"vertices:            {summary['vertices']}",
            f"  trimmed:           {summary['vertices_trimmed']}",
            f"  on border:         {summary['vertices_on_border']}",
            f"faces:               {summary['faces']}",
            f"  trimmed:           {summary['faces_trimmed']}",
        ]
        print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
