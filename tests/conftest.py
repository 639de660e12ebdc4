import pytest
from click.testing import CliRunner

from signal_decoder.config import AnalyzerSettings


@pytest.fixture
def settings():
    return AnalyzerSettings()


@pytest.fixture
def extended_settings():
    return AnalyzerSettings(extended_codecs=True)


@pytest.fixture
def runner():
    return CliRunner()
