import pytest

from batchsched import version


def test_info_first_line_carries_api_version():
    lines = version.info("v1alpha1")
    assert lines[0] == "API Version: v1alpha1"


def test_info_reports_build_fields():
    lines = version.info("v1")
    assert lines[1] == f"Version: {version.VERSION}"
    assert lines[2] == f"Git SHA: {version.GIT_SHA}"
    assert lines[3] == f"Built At: {version.BUILT}"
    assert len(lines) == 6


def test_defaults_are_not_provided():
    assert version.info("x")[1] == "Version: Not provided."


def test_print_version_and_exit(capsys):
    with pytest.raises(SystemExit) as excinfo:
        version.print_version_and_exit("v2")
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert out.splitlines() == version.info("v2")