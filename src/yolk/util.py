from typing import Dict
from pathlib import Path
import hashlib
import json


def load_json(path: str) -> Dict:
    """Reads a compiler config file; sections are validated by yolk.config."""
    with open(path, 'r', encoding='utf-8') as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"Compiler config must be a JSON object: {path}")
    return config


def read_file(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"Yolk source not found: {path}")
    return path.read_text(encoding='utf-8')


def compute_hash(content: str) -> str:
    """SHA256 of emitted Yolol text, recorded in the compile report."""
    return hashlib.sha256(content.encode('utf-8')).hexdigest()
