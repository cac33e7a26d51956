# -*- coding: utf-8 -*-

import pytest

from minipromise.common import path


@pytest.fixture
def user_dirs(tmpdir, monkeypatch):
    """Redirect the config and log directories into a temporary folder.

    Returns:
        py.path.local: the temporary folder.
    """
    config_dir = tmpdir.mkdir('config')
    log_dir = tmpdir.mkdir('log')
    monkeypatch.setattr(path, 'get_config_dir', lambda: str(config_dir))
    monkeypatch.setattr(path, 'get_log_dir', lambda: str(log_dir))
    return tmpdir
