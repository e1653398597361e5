"""
どこで: `util.utils`
何を: フィールド設定 YAML（`runner` / `artefact` セクション）の読み込みとセクション参照。
なぜ: 設定ファイルの所在・マージ規則・型の検査を `api.config` から切り離すため。
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from common.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("configs") / "default.yaml"
OVERRIDE_CONFIG = Path("config.yaml")


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    """YAML を辞書として読む。読めない/辞書でない場合は警告して空辞書。"""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("config load failed: %s (%s)", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("config ignored (top level is %s): %s", type(data).__name__, path)
        return {}
    return data


def _find_project_root(start: Path) -> Path:
    """`configs/` や `pyproject.toml` を目印に、`start` から上へ最も近いルートを探す。

    見つからなければ `start.parent.parent`（`<repo>/src/util` → `<repo>`）。
    """
    cur = start.resolve()
    markers = (".git", "pyproject.toml", "configs")
    for parent in [cur, *cur.parents]:
        if any((parent / m).exists() for m in markers):
            return parent
    return cur.parent.parent


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """フィールド設定を読み込んで辞書で返す（フェイルソフト）。

    優先順:
    1) `configs/default.yaml`（ベース）
    2) ルート `config.yaml`（`runner` / `artefact` をトップレベル単位で上書き）

    - いずれも存在しない/不正な場合は空辞書を返す。
    - ディープマージは行わない（`artefact` を上書きするなら全セクションを書く）。
    """
    root = project_root or _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for rel in (DEFAULT_CONFIG, OVERRIDE_CONFIG):
        path = root / rel
        if path.exists():
            loaded = _safe_load_yaml(path)
            logger.debug("config %s: sections=%s", path, sorted(loaded))
            merged.update(loaded)
    return merged


def config_section(cfg: Mapping[str, Any], *path: str) -> Optional[Mapping[str, Any]]:
    """`cfg[path[0]][path[1]]...` の辞書を返す。途中で欠ければ None。

    例: `config_section(cfg, "artefact", "movement")`。
    末端が辞書以外なら `ConfigError`（配置や動作の設定値を黙って捨てない）。
    """
    cur: Any = cfg
    for key in path:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    if cur is None:
        return None
    if not isinstance(cur, Mapping):
        raise ConfigError(f"設定 {'.'.join(path)} は辞書が必要: {type(cur).__name__}")
    return cur


def runner_option(cfg: Mapping[str, Any], key: str) -> Optional[float]:
    """`runner.<key>` を数値で返す。未設定・数値でない値は None（呼び出し側が既定へ）。"""
    runner = config_section(cfg, "runner") if isinstance(cfg, Mapping) else None
    raw = runner.get(key) if runner is not None else None
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        logger.warning("invalid runner.%s %r; ignored", key, raw)
        return None
    return value
