from pathlib import Path
import json

from .core.errors import InvalidConfiguration
from .core.presets import get_preset
from .core.settings import Settings


def load_cfg(path="config.json") -> dict:
    # 读取并解析 JSON 配置文件
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfiguration(f"配置文件不是合法 JSON：{path}: {exc}") from exc

    # 基本结构校验
    for sec in ("model", "time", "run"):
        if not isinstance(data.get(sec), dict):
            raise InvalidConfiguration(f"缺少配置节 [{sec}]")

    t, r = data["time"], data["run"]

    # 最小校验 + 安全默认
    t.setdefault("steps", 1000)
    t.setdefault("save_every", 100)
    t["steps"] = _number(t, "steps", int, "time")
    t["save_every"] = _number(t, "save_every", int, "time")
    if t["steps"] < 0 or t["save_every"] <= 0:
        raise InvalidConfiguration("time.steps 需 >= 0，time.save_every 需 > 0")
    r.setdefault("output_dir", "data/output/run-minimal")
    r.setdefault("strict_mass", False)
    r.setdefault("edge_warn_ratio", 0.9)
    r["edge_warn_ratio"] = _number(r, "edge_warn_ratio", float, "run")
    data.setdefault("viz", {})

    # 提前构造一次，让非法模型参数在加载阶段就失败
    settings_from_cfg(data)
    return data


def settings_from_cfg(cfg: dict) -> Settings:
    """model 节 → Settings；若给出 preset，则以预设为底、显式字段覆盖。"""
    model = dict(cfg.get("model", {}))
    preset = model.pop("preset", None)
    if preset:
        base = get_preset(preset).to_dict()
        base.update(model)
        model = base
    return Settings.from_dict(model)


def _number(sec: dict, key: str, kind, sec_name: str):
    value = sec[key]
    # bool 是 int 的子类，这里单独拒绝
    if isinstance(value, bool):
        raise InvalidConfiguration(f"{sec_name}.{key} 不是数值：{value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(f"{sec_name}.{key} 不是数值：{value!r}") from exc
