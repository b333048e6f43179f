#!/usr/bin/env python3
from __future__ import annotations

import subprocess
import sys
import tempfile
from pathlib import Path


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def smoke_collage() -> int:
    """Render a tiny collage through the CLI from generated images."""
    from PIL import Image

    with tempfile.TemporaryDirectory() as tmp:
        src = Path(tmp) / "pics"
        src.mkdir()
        for i, size in enumerate([(400, 300), (300, 300), (500, 300), (300, 450)]):
            Image.new("RGB", size, (40 * i, 120, 200)).save(src / f"{i:02d}.png")
        out = Path(tmp) / "collage.png"
        return run([sys.executable, "-m", "app.photocollage.main", str(src), "-o", str(out), "--log-level", "WARNING"])


def main() -> int:
    code = run([sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_*.py"])
    if code == 0:
        code = smoke_collage()
    if code != 0:
        print("\n❌ dev_check failed")
        return code

    print("\n✅ dev_check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
