# どこで: `src/polyoffset/__main__.py`。
# 何を: `python -m polyoffset ...` の CLI エントリポイントを提供する。
# なぜ: SVG パスの輪郭化を、スクリプトを書かずに試せるようにするため。

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np


def _format_rows(points: np.ndarray) -> str:
    return "\n".join(f"{x:.6f} {y:.6f} {z:.6f}" for x, y, z in points.tolist())


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="python -m polyoffset")
    p.add_argument("-v", "--verbose", action="store_true", help="debug ログを出力する")
    sub = p.add_subparsers(dest="cmd", required=True)

    outline = sub.add_parser("outline", help="SVG パスを輪郭点列に変換する")
    outline.add_argument("d", help="SVG パスデータ（d 属性）")
    outline.add_argument(
        "--extension",
        type=float,
        default=0.0,
        help="閉パスの拡張量 / 開パスの幅",
    )
    outline.add_argument("--step", type=float, default=None, help="線形化のステップ幅")
    outline.add_argument("--scale", type=float, default=None, help="等方スケール")
    outline.add_argument("--config", default=None, help="config.yaml のパス")
    outline.add_argument("--out", default=None, help="SVG の保存先（省略時は標準出力へ x y z 行）")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "outline":
        from polyoffset.core.runtime_config import set_config_path
        from polyoffset.export.svg import export_svg
        from polyoffset.svg.outline import path_outline

        if args.config is not None:
            set_config_path(args.config)
        try:
            result = path_outline(
                args.d,
                extension=args.extension,
                step_size=args.step,
                scale=args.scale,
            )
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

        if args.out is None:
            print(_format_rows(result.points))
            return 0
        # 開パスの太線輪郭も閉じた輪郭として出力する。
        saved = export_svg(result.points, args.out, closed=True)
        print(str(saved))
        return 0

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
