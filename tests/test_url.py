"""Tests for RemoteUrl and directory name derivation"""
import pytest

from gitopolis.exceptions import StateError
from gitopolis.models.url import RemoteUrl, derive_directory_name


class TestDeriveDirectoryName:
    """Test deriving the clone directory from a URL."""

    @pytest.mark.parametrize("url,expected", [
        ("git@github.com:user/repo.git", "repo"),
        ("https://github.com/user/repo.git", "repo"),
        ("https://github.com/user/repo", "repo"),
        ("git@gitlab.com:group/subgroup/project.git", "project"),
        ("https://dev.azure.com/org/project/_git/myrepo", "myrepo"),
        ("source_repo", "source_repo"),
        ("some/repository/path.git", "path"),
        ("C:\\Users\\test\\repo.git", "repo"),
        ("C:\\Temp\\myrepo", "myrepo"),
        ("https://github.com/user/repo/", "repo"),
        ("/srv/git/repo/.git", "repo"),
    ])
    def test_known_forms(self, url, expected):
        """Test directory names derived from known URL forms."""
        assert derive_directory_name(url) == expected

    def test_accepts_parsed_url(self):
        """Test a parsed URL is accepted."""
        url = RemoteUrl.parse("ssh://git@example.com:2222/team/tool.git")
        assert url.directory_name() == "tool"

    @pytest.mark.parametrize("url", ["https://github.com/", "git@github.com:", ".git"])
    def test_unnameable(self, url):
        """Test URLs with no usable name are rejected."""
        with pytest.raises(StateError, match="Could not extract repository name"):
            derive_directory_name(url)


class TestRemoteUrlParse:
    """Test URL decomposition."""

    def test_https(self):
        """Test parsing an https URL."""
        url = RemoteUrl.parse("https://github.com/user/repo.git")
        assert url.scheme == "https"
        assert url.host == "github.com"
        assert url.path == "/user/repo.git"
        assert not url.is_local

    def test_scp_like(self):
        """Test parsing an scp-like address."""
        url = RemoteUrl.parse("git@github.com:user/repo.git")
        assert url.scheme == "ssh"
        assert url.user == "git"
        assert url.host == "github.com"
        assert url.path == "user/repo.git"

    def test_local_path(self):
        """Test parsing a local path."""
        url = RemoteUrl.parse("../other/repo")
        assert url.is_local
        assert url.path == "../other/repo"

    def test_windows_path_is_local(self):
        """Test a Windows drive path is local."""
        url = RemoteUrl.parse("C:\\Users\\test\\repo.git")
        assert url.is_local
        assert url.host == ""

    def test_round_trips_text(self):
        """Test the original text is kept."""
        text = "git@github.com:user/repo.git"
        assert str(RemoteUrl.parse(text)) == text

    def test_strips_surrounding_whitespace(self):
        """Test surrounding whitespace is stripped."""
        assert RemoteUrl.parse("  repo  ").text == "repo"

    @pytest.mark.parametrize("value", ["", "   ", "https://", "repo\nother"])
    def test_invalid(self, value):
        """Test invalid URLs raise StateError."""
        with pytest.raises(StateError, match="Invalid Git URL"):
            RemoteUrl.parse(value)

    def test_equality_and_ordering_use_text(self):
        """Test equality and ordering compare the text."""
        a = RemoteUrl.parse("https://a.example/x")
        b = RemoteUrl.parse("https://b.example/x")
        assert a == RemoteUrl.parse("https://a.example/x")
        assert a < b
        assert len({a, RemoteUrl.parse("https://a.example/x")}) == 1

    def test_parse_is_identity_for_parsed(self):
        """Test parsing a parsed URL returns it unchanged."""
        url = RemoteUrl.parse("repo")
        assert RemoteUrl.parse(url) is url
