"""Tests for VCS codes."""

import pytest

from scrutinizer_badges.vcs import (
    HOSTED_VCS,
    VCSCode,
    get_vcs_code,
    list_supported_platforms,
)


def test_get_vcs_code():
    assert get_vcs_code("github") is VCSCode.GITHUB
    assert get_vcs_code("Bitbucket") is VCSCode.BITBUCKET
    assert get_vcs_code("gitlab").value == "gl"
    assert get_vcs_code("plain-git").value == "gp"


def test_get_vcs_code_unsupported():
    with pytest.raises(ValueError, match="Unsupported VCS platform: gitea"):
        get_vcs_code("gitea")


def test_list_supported_platforms():
    assert list_supported_platforms() == ["bitbucket", "github", "gitlab", "plain-git"]


def test_hosted_vcs():
    """Only GitHub and Bitbucket use user/repo slugs."""
    assert [code.value for code in HOSTED_VCS] == ["g", "b"]
