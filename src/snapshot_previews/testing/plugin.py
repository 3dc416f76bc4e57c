"""pytest plugin generating one test case per discovered preview.

Registered through the ``pytest11`` entry point. For every collected class
deriving from ``PreviewBaseTest`` the plugin runs discovery once (a fresh
``DiscoverySession`` per class) and parametrizes ``test_preview`` with the
resulting identities, so each preview passes or fails on its own.

Options:
  --snapshot-record   overwrite every reference image instead of comparing

Attachments handed to ``snapshot_attach`` are written into the test's
``tmp_path`` and listed in the report's ``user_properties`` as
``("attachment:<name>", <path>)``.
"""

from __future__ import annotations

import logging

import pytest

from ..snapshots.store import Attachment, sanitize_path_component
from .snapshot_test import PreviewBaseTest, PreviewCase

_logger = logging.getLogger(__name__)


def pytest_addoption(parser) -> None:
    group = parser.getgroup("snapshot-previews")
    group.addoption(
        "--snapshot-record",
        action="store_true",
        default=False,
        help="Record new reference images for all previews instead of comparing.",
    )


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "gui: test needs a Qt application")
    config.addinivalue_line("markers", "snapshot_preview: generated preview snapshot case")


def pytest_generate_tests(metafunc) -> None:
    cls = metafunc.cls
    if cls is None or not issubclass(cls, PreviewBaseTest):
        return
    if "preview_case" not in metafunc.fixturenames:
        return
    session = cls.discovery_session()
    cls.discover_previews(session)
    cases = session.cases()
    _logger.debug("%s: generating %d preview cases", cls.__name__, len(cases))
    metafunc.parametrize(
        "preview_case",
        [pytest.param(PreviewCase(session, c), marks=pytest.mark.snapshot_preview) for c in cases],
        ids=[c.test_id for c in cases],
    )


@pytest.fixture
def snapshot_recording(request) -> bool:
    return bool(request.config.getoption("--snapshot-record"))


@pytest.fixture
def snapshot_attach(request, tmp_path):
    def attach(attachment: Attachment) -> None:
        stem = sanitize_path_component(request.node.name) or "preview"
        path = tmp_path / f"{stem}-{attachment.name.lower()}.png"
        path.write_bytes(attachment.data)
        request.node.user_properties.append((f"attachment:{attachment.name}", str(path)))

    return attach
