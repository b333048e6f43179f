import contextlib
import io
import json
import shutil
import unittest
import uuid
from pathlib import Path

from PIL import Image

from app.photocollage.main import expand_inputs, main


class TestMainCli(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp_path = Path(".tmp-tests-cli-" + str(uuid.uuid4())[:8])
        self.src_dir = self.tmp_path / "pics"
        self.src_dir.mkdir(parents=True, exist_ok=True)
        for name in ("b.png", "a.png", "c.png"):
            Image.new("RGB", (100, 100), (10, 20, 30)).save(self.src_dir / name)
        (self.src_dir / "notes.txt").write_text("not an image")

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp_path, ignore_errors=True)

    def test_expand_inputs_sorts_and_filters_directories(self):
        expanded = expand_inputs([str(self.src_dir), "https://example.com/x.png"])
        self.assertEqual(
            [Path(p).name for p in expanded[:3]], ["a.png", "b.png", "c.png"]
        )
        self.assertEqual(expanded[3], "https://example.com/x.png")

    def test_renders_collage_file(self):
        out = self.tmp_path / "collage.png"
        code = main(
            [str(self.src_dir), "-o", str(out), "--max-width", "600", "--log-level", "WARNING"]
        )
        self.assertEqual(code, 0)
        with Image.open(out) as img:
            self.assertEqual(img.format, "PNG")
            self.assertLessEqual(abs(img.size[0] - 600), 1)

    def test_layout_only_prints_json(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main([str(self.src_dir), "--max-width", "600", "--layout-only", "--log-level", "WARNING"])
        self.assertEqual(code, 0)
        payload = json.loads(buf.getvalue())
        self.assertEqual(len(payload["rows"]), 1)
        self.assertEqual([c["index"] for c in payload["rows"][0]], [0, 1, 2])
        self.assertEqual(payload["rows"][0][0]["x"], 10)

    def test_missing_source_exits_with_error(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = main([str(self.tmp_path / "missing.png"), "-o", str(self.tmp_path / "o.png"), "--log-level", "ERROR"])
        self.assertEqual(code, 2)
        self.assertIn("error:", err.getvalue())


if __name__ == "__main__":
    unittest.main()
