from PIL import Image

from gitbook_books import is_image, normalize_image


def test_is_image_by_extension():
    assert is_image('a.PNG') and is_image('b.jpeg') and is_image('c.webp')
    assert not is_image('anim.gif') and not is_image('notes.txt') and not is_image('logo.svg')


def test_wide_image_is_shrunk_keeping_aspect(tmp_path):
    p = tmp_path / 'wide.png'
    Image.new('RGB', (1400, 700), (10, 120, 200)).save(p)
    assert normalize_image(str(p)) == (700, 350)
    with Image.open(p) as im:
        assert im.size == (700, 350)
        assert im.format == 'PNG'


def test_odd_aspect_rounds_height(tmp_path):
    p = tmp_path / 'odd.jpg'
    Image.new('RGB', (1000, 333), (0, 0, 0)).save(p, quality=95)
    normalize_image(str(p))
    with Image.open(p) as im:
        assert im.width == 700
        assert im.height == round(333 * 700 / 1000)


def test_small_image_is_reencoded_without_resize(tmp_path):
    p = tmp_path / 'small.jpg'
    Image.new('RGB', (300, 200), (200, 30, 30)).save(p, quality=95)
    before = p.read_bytes()
    assert normalize_image(str(p)) == (300, 200)
    assert p.read_bytes() != before
    with Image.open(p) as im:
        assert im.size == (300, 200)
        assert im.format == 'JPEG'


def test_rgba_jpeg_fallback_and_png_alpha_kept(tmp_path):
    p = tmp_path / 'alpha.png'
    Image.new('RGBA', (800, 400), (0, 0, 0, 0)).save(p)
    normalize_image(str(p))
    with Image.open(p) as im:
        assert im.mode == 'RGBA' and im.size == (700, 350)


def test_multi_picture_jpeg_saved_as_jpeg(tmp_path):
    p = tmp_path / 'camera.jpg'
    first = Image.new('RGB', (900, 600), (10, 10, 10))
    first.save(p, format='MPO', save_all=True, append_images=[Image.new('RGB', (900, 600))], quality=95)
    with Image.open(p) as im:
        assert im.format == 'MPO'
    assert normalize_image(str(p)) == (700, 467)
    with Image.open(p) as im:
        assert im.format == 'JPEG'
    assert not (tmp_path / 'camera.jpg.tmp').exists()
