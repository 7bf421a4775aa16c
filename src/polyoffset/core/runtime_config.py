# どこで: `src/polyoffset/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 交差判定の閾値や退化入力の扱いを、コードを変えずに切り替えられるようにするため。

"""実行時設定（`config.yaml`）の探索・ロード・キャッシュを担当する。

このモジュールは、以下を提供する:

- `config.yaml` を「同梱デフォルト → ユーザー設定（任意）」の順に適用して `RuntimeConfig` を構築
- 探索パス（CWD / HOME）と、明示指定（`set_config_path()`）の両方に対応
- 1 回ロードした結果をプロセス内でキャッシュ（設定を切り替える場合は `set_config_path()` で破棄）

入出力 / 副作用
----------------
- 入力: 同梱 `polyoffset/resource/default_config.yaml`、任意でユーザーの `config.yaml`
- 出力: `RuntimeConfig`（不変データ）
- 副作用: ファイル読み取り、YAML パース、モジュールグローバルへのキャッシュ保存

実装メモ
--------
- ユーザー設定の適用は `dict.update()`（トップレベルの浅い上書き）で行う。
  ネストした mapping は「部分的にマージ」されず「丸ごと置換」される。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

DEGENERATE_POLICIES = ("raise", "nan")


@dataclass(frozen=True, slots=True)
class OffsetConfig:
    """オフセット計算の設定（`config.yaml` の `offset`）。"""

    intersection_eps: float
    degenerate: str

    @property
    def strict(self) -> bool:
        """退化入力で例外を送出するなら True。"""
        return self.degenerate == "raise"


@dataclass(frozen=True, slots=True)
class SvgConfig:
    """SVG パス線形化の設定（`config.yaml` の `svg`）。"""

    step_size: float
    scale: float


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """polyoffset の実行時設定。

    Attributes
    ----------
    config_path:
        実際に採用されたユーザー設定ファイルのパス。
        ユーザー設定が無い場合は None（同梱デフォルトのみで動作）。
    offset:
        オフセット計算の設定。
    svg:
        SVG パス線形化の設定。
    """

    config_path: Path | None
    offset: OffsetConfig
    svg: SvgConfig


# `set_config_path()` で指定される「明示 config」のパス。
_EXPLICIT_CONFIG_PATH: Path | None = None
# `runtime_config()` のプロセス内キャッシュ。設定を切り替える場合は破棄する。
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Parameters
    ----------
    path:
        `config.yaml` のパス。None の場合は明示指定を解除する。

    Notes
    -----
    設定が変わるため、`runtime_config()` のキャッシュを破棄する。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    """既定の `config.yaml` 探索候補を返す。

    探索順（先勝ち）:
    - `./.polyoffset/config.yaml`
    - `~/.config/polyoffset/config.yaml`
    """

    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".polyoffset" / "config.yaml",
        home / ".config" / "polyoffset" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    """任意値を mapping として解釈し、dict に正規化して返す。"""

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_float(value: Any, *, key: str) -> float | None:
    """任意値を有限の float として解釈して返す。"""

    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}")
    try:
        f = float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc
    if not math.isfinite(f):
        raise RuntimeError(f"{key} は有限の数値である必要があります: got={value!r}")
    return f


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    """YAML テキストを読み、トップレベル mapping を dict として返す。"""

    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """UTF-8 の YAML ファイルを読み、dict を返す。"""

    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("polyoffset")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="polyoffset/resource/default_config.yaml")


def _parse_offset(payload: dict[str, Any]) -> OffsetConfig:
    offset = _as_mapping(payload.get("offset"), key="offset")

    eps = _as_float(offset.get("intersection_eps"), key="offset.intersection_eps")
    if eps is None:
        raise RuntimeError(
            "offset.intersection_eps が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if eps < 0.0:
        raise ValueError(f"offset.intersection_eps は 0 以上である必要があります: got={eps}")

    degenerate = offset.get("degenerate")
    if degenerate is None:
        raise RuntimeError(
            "offset.degenerate が未設定です（同梱 default_config.yaml を確認してください）"
        )
    degenerate_s = str(degenerate).strip().lower()
    if degenerate_s not in DEGENERATE_POLICIES:
        raise RuntimeError(
            f"offset.degenerate は {DEGENERATE_POLICIES} のいずれかである必要があります"
            f": got={degenerate!r}"
        )

    return OffsetConfig(intersection_eps=float(eps), degenerate=degenerate_s)


def _parse_svg(payload: dict[str, Any]) -> SvgConfig:
    svg = _as_mapping(payload.get("svg"), key="svg")

    step_size = _as_float(svg.get("step_size"), key="svg.step_size")
    if step_size is None:
        raise RuntimeError(
            "svg.step_size が未設定です（同梱 default_config.yaml を確認してください）"
        )
    if step_size <= 0.0:
        raise ValueError(f"svg.step_size は正の値である必要があります: got={step_size}")

    scale = _as_float(svg.get("scale"), key="svg.scale")
    if scale is None:
        scale = 1.0
    if scale == 0.0:
        raise ValueError("svg.scale は 0 以外である必要があります")

    return SvgConfig(step_size=float(step_size), scale=float(scale))


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    読み込み元の優先順位（後勝ち）:
    1) 同梱 `polyoffset/resource/default_config.yaml`
    2) 探索で見つかった `config.yaml`（任意）
    3) `set_config_path()` で明示指定された `config.yaml`（任意）
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    # 既定の探索は「CWD → HOME」の順。最初に見つかった 1 つのみを採用する。
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload.update(_load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload.update(_load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        offset=_parse_offset(payload),
        svg=_parse_svg(payload),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = [
    "DEGENERATE_POLICIES",
    "OffsetConfig",
    "RuntimeConfig",
    "SvgConfig",
    "runtime_config",
    "set_config_path",
]
