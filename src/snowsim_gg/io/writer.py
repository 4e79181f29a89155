from pathlib import Path
from typing import Optional
import json

from ..core.settings import Settings


def prepare_out(output_dir: str) -> Path:
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_meta(cfg: dict, out: Path, settings: Optional[Settings] = None) -> Path:
    """写出运行配置；给出 settings 时附带预设合并后的最终参数。"""
    meta = dict(cfg)
    if settings is not None:
        meta["resolved_settings"] = settings.to_dict()
    path = out / "meta_config.json"
    path.write_text(json.dumps(meta, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def frame_path(out: Path, step: int) -> Path:
    """渲染帧文件名；帧是图像，不含可恢复的模拟状态。"""
    return out / f"frame_{step:06d}.png"
