import os
import pytest


def build_sim_asset_structure(base_dir):
    """
    Create a fake public/assets hierarchy:
    - U2524_ Valley View Business Park   (Documents, Extra Stuff, files)
    - U2524_ Valley View Annex
    - U2961_ JMEUC PUMP STATION
    - PRO 042_Harbor Tilt Panels
    - files/U2961_ JMEUC PUMP STATION   (sidebar area)
    """
    root = os.path.join(base_dir, "assets")
    vv = os.path.join(root, "U2524_ Valley View Business Park")
    os.makedirs(os.path.join(vv, "Documents", "Change Order (CO)"))
    os.makedirs(os.path.join(vv, "Extra Stuff"))
    os.makedirs(os.path.join(vv, ".git"))
    os.makedirs(os.path.join(root, "U2524_ Valley View Annex"))
    os.makedirs(os.path.join(root, "U2961_ JMEUC PUMP STATION"))
    os.makedirs(os.path.join(root, "PRO 042_Harbor Tilt Panels"))

    with open(os.path.join(vv, "Readme.PDF"), "wb") as f:
        f.write(b"%PDF-1.4")
    with open(os.path.join(vv, "appendix.txt"), "w") as f:
        f.write("appendix")
    with open(os.path.join(vv, "Documents", "scope.pdf"), "wb") as f:
        f.write(b"x" * 10)

    files = os.path.join(root, "files", "U2961_ JMEUC PUMP STATION")
    os.makedirs(os.path.join(files, "Documents", "Level 2", "Level 3", "Level 4"))
    os.makedirs(os.path.join(files, "RFI Responses"))
    os.makedirs(os.path.join(files, "Site Photos"))
    with open(os.path.join(files, "Documents", "transmittal.pdf"), "wb") as f:
        f.write(b"abc")
    with open(os.path.join(root, "files", "index.txt"), "w") as f:
        f.write("index")

    return {
        "root": root,
        "valley_view": vv,
        "files": os.path.join(root, "files"),
    }


@pytest.fixture(scope="function")
def sim_assets(tmp_path):
    return build_sim_asset_structure(str(tmp_path))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    # Keep a developer's real settings and environment out of the tests
    monkeypatch.setenv("ASSETNAV_SETTINGS", str(tmp_path / "no-settings.json"))
    monkeypatch.delenv("ASSETNAV_ROOT", raising=False)
    monkeypatch.delenv("ASSETNAV_PROJECTS", raising=False)
