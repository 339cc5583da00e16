#!/usr/bin/env python3
"""
smoke_test.py

Quick checks against a running embeddings server:
  1) GET /        liveness probe
  2) GET /health  provider + dimensions
  3) POST /v1/embeddings  shape of the envelope
"""

from __future__ import annotations

import argparse
from typing import List

import numpy as np
import requests


def embed_via_service(texts: List[str], base_url: str, model: str, timeout: float) -> dict:
    r = requests.post(
        f"{base_url.rstrip('/')}/v1/embeddings",
        json={"model": model, "input": texts},
        timeout=timeout,
    )
    r.raise_for_status()
    return r.json()


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--url", default="http://localhost:8080", help="embeddings server base url")
    p.add_argument("--model", default="nomic-text-embed")
    p.add_argument("--text", action="append", help="text to embed (repeatable)")
    p.add_argument("--timeout", type=float, default=120)
    args = p.parse_args()

    base = args.url.rstrip("/")
    texts = args.text or ["The food was delicious and the waiter..."]

    # 1) Liveness
    r = requests.get(f"{base}/", timeout=10)
    r.raise_for_status()
    if r.text != "Hello, World!":
        raise RuntimeError(f"[smoke] unexpected root body: {r.text!r}")
    print("[smoke] root ok")

    # 2) Health
    health = requests.get(f"{base}/health", timeout=10).json()
    print("[smoke] health:", health)
    target = int(health["target_dimension"])

    # 3) Embeddings
    data = embed_via_service(texts, base, args.model, args.timeout)
    if data["model"] != args.model:
        raise RuntimeError(f"[smoke] model not echoed: {data['model']!r}")
    if len(data["data"]) != len(texts):
        raise RuntimeError(f"[smoke] expected {len(texts)} embeddings, got {len(data['data'])}")

    for i, item in enumerate(data["data"]):
        vec = np.array(item["embedding"], dtype="float32")
        if item["index"] != i or vec.shape != (target,):
            raise RuntimeError(f"[smoke] bad item {i}: index={item['index']} shape={vec.shape}")
        print(f"  {i:>2}. dim={vec.shape[0]}  norm={np.linalg.norm(vec):.4f}  text={texts[i][:40]}")

    print("\n[smoke] OK")


if __name__ == "__main__":
    main()
