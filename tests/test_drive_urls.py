import pytest

from assetnav.drive_urls import (
    convert_google_drive_to_download_url, convert_google_drive_url, get_google_drive_file_id,
    is_google_drive_url,
)


@pytest.mark.parametrize("url,expected", [
    ("https://drive.google.com/file/d/1AbC_-9/view?usp=sharing", "1AbC_-9"),
    ("https://drive.google.com/open?id=XYZ123", "XYZ123"),
    ("https://drive.google.com/uc?export=download&id=QQ7", "QQ7"),
    ("https://docs.google.com/document/d/DOC42/edit", "DOC42"),
    ("https://example.com/file.pdf", None),
    (None, None),
])
def test_file_id(url, expected):
    assert get_google_drive_file_id(url) == expected


def test_is_google_drive_url():
    assert is_google_drive_url("https://drive.google.com/file/d/a/view")
    assert not is_google_drive_url("/assets/a.pdf")
    assert not is_google_drive_url(None)


class TestConvert:

    def test_view_url_kept_as_view(self):
        url = "https://drive.google.com/file/d/abc/view?usp=sharing"
        assert convert_google_drive_url(url) == "https://drive.google.com/file/d/abc/view"

    def test_embed(self):
        url = "https://drive.google.com/file/d/abc/view"
        assert convert_google_drive_url(url, use_embed=True) == "https://drive.google.com/file/d/abc/preview"

    def test_open_url_becomes_preview(self):
        assert convert_google_drive_url("https://drive.google.com/open?id=abc") == \
            "https://drive.google.com/file/d/abc/preview"

    def test_other_urls_unchanged(self):
        assert convert_google_drive_url("/assets/a.pdf") == "/assets/a.pdf"

    def test_download(self):
        assert convert_google_drive_to_download_url("https://drive.google.com/file/d/abc/view") == \
            "https://drive.google.com/uc?export=download&id=abc"
        assert convert_google_drive_to_download_url("/assets/a.pdf") == "/assets/a.pdf"
