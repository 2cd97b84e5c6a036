import numpy as np
from PIL import Image

from perceptive.io import iter_image_paths, iter_images, load_image


def test_iter_image_paths_filters_extensions(tmp_path):
    (tmp_path / "sub").mkdir()
    Image.new("RGB", (4, 4)).save(tmp_path / "a.png")
    Image.new("RGB", (4, 4)).save(tmp_path / "sub" / "b.JPG", format="JPEG")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    paths = list(iter_image_paths(str(tmp_path)))
    assert paths == [str(tmp_path / "a.png"), str(tmp_path / "sub" / "b.JPG")]


def test_load_image_converts_to_rgb(tmp_path):
    Image.new("L", (3, 2), 9).save(tmp_path / "g.png")
    img = load_image(str(tmp_path / "g.png"))
    assert img.mode == "RGB"
    assert img.size == (3, 2)


def test_iter_images_skips_broken(tmp_path):
    Image.new("RGB", (4, 4)).save(tmp_path / "ok.png")
    (tmp_path / "bad.png").write_bytes(b"garbage")
    loaded = [path for path, _ in iter_images(str(tmp_path))]
    assert loaded == [str(tmp_path / "ok.png")]


def test_load_image_scales_sixteen_bit_png(tmp_path):
    Image.fromarray(np.full((8, 8), 60000, dtype=np.uint16)).save(tmp_path / "deep.png")
    img = load_image(str(tmp_path / "deep.png"))
    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == (234, 234, 234)
