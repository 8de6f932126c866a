"""Tests for mapping local paths to data set member names."""

import pytest

from zsync.sync.naming import (
    container_of,
    map_path,
    member_name,
    normalize_remote_root,
    relative_container,
)


class TestMapPath:
    """Tests for map_path."""

    def test_nested_path(self):
        """Directories become qualifiers under the remote root."""
        assert map_path("a/b/report.txt", "USER.ROOT") == "USER.ROOT.A.B(REPORT)"

    def test_file_in_root(self):
        """A file without directories goes into the remote root data set."""
        assert map_path("onlyfile.dat", "USER.ROOT") == "USER.ROOT(ONLYFILE)"

    def test_member_truncated_to_eight(self):
        """Member names keep the first 8 characters of the stem."""
        assert map_path("averylongname.txt", "USER.ROOT") == "USER.ROOT(AVERYLON)"

    def test_directory_segment_truncated_to_eight(self):
        """Each qualifier keeps the first 8 characters of its directory."""
        result = map_path("directoryname/sub/x.c", "USER.ROOT")
        assert result == "USER.ROOT.DIRECTOR.SUB(X)"
        qualifier = container_of(result).split(".")[2]
        assert qualifier == "directoryname"[:8].upper()

    def test_only_last_extension_stripped(self):
        """Only the text after the final dot is removed."""
        assert map_path("lib/pkg.v1.cbl", "HLQ") == "HLQ.LIB(PKG.V1)"

    def test_file_without_extension(self):
        """File names without a dot are used as they are, truncated."""
        assert map_path("jcl/compilejob", "HLQ") == "HLQ.JCL(COMPILEJ)"

    def test_upper_cases_everything(self):
        """The whole name, including the remote root, is upper-cased."""
        assert map_path("src/Main.java", "user.root") == "USER.ROOT.SRC(MAIN)"

    def test_deterministic(self):
        """The same input always gives the same name."""
        first = map_path("x/y/z.txt", "USER.ROOT")
        second = map_path("x/y/z.txt", "USER.ROOT")
        assert first == second

    def test_truncation_collision_is_accepted(self):
        """Paths differing only after the 8th character share a member."""
        first = map_path("src/programA1.cbl", "HLQ")
        second = map_path("src/programA2.cbl", "HLQ")
        assert first == second == "HLQ.SRC(PROGRAMA)"

    def test_case_collision_is_accepted(self):
        """Paths differing only in case share a member."""
        assert map_path("Src/a.txt", "HLQ") == map_path("src/A.txt", "HLQ")


class TestMemberName:
    """Tests for member_name."""

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("report.txt", "report"),
            ("archive.tar.gz", "archive."),
            ("noext", "noext"),
            ("abcdefghij", "abcdefgh"),
            (".profile", ""),
        ],
    )
    def test_member_name(self, file_name, expected):
        """Member names drop the last extension and are truncated."""
        assert member_name(file_name) == expected

    def test_dotfile_maps_to_empty_member(self):
        """A name that is only an extension leaves an empty member name."""
        assert map_path("cfg/.profile", "USER.ROOT") == "USER.ROOT.CFG()"


class TestContainerOf:
    """Tests for container_of."""

    @pytest.mark.parametrize(
        "path",
        ["a/b/report.txt", "onlyfile.dat", "deep/er/dir/x.y.z", "verylongdir/f"],
    )
    def test_container_is_text_before_last_bracket(self, path):
        """container_of returns everything before the final bracket."""
        remote_name = map_path(path, "USER.ROOT")
        assert container_of(remote_name) == remote_name[: remote_name.rfind("(")]

    def test_without_member(self):
        """A name without a member is returned unchanged."""
        assert container_of("USER.ROOT.A") == "USER.ROOT.A"


class TestRelativeContainer:
    """Tests for relative_container."""

    def test_nested_container(self):
        """Containers below the root are returned relative to it."""
        assert relative_container("USER.ROOT.A.B", "USER.ROOT") == "A.B"

    def test_root_container(self):
        """The root container has no relative name."""
        assert relative_container("USER.ROOT", "USER.ROOT") is None

    def test_case_insensitive_root(self):
        """The remote root is compared case-insensitively."""
        assert relative_container("USER.ROOT.SRC", "user.root") == "SRC"

    def test_unrelated_container(self):
        """A container outside the root has no relative name."""
        assert relative_container("OTHER.SRC", "USER.ROOT") is None


class TestNormalizeRemoteRoot:
    """Tests for normalize_remote_root."""

    @pytest.mark.parametrize(
        "remote_root,expected",
        [
            ("user.root", "USER.ROOT"),
            ("  USER.ROOT  ", "USER.ROOT"),
            ("'user.root'", "USER.ROOT"),
            ("user.root.", "USER.ROOT"),
            ("'", ""),
        ],
    )
    def test_normalize(self, remote_root, expected):
        """Blanks, quotes and a trailing dot are dropped."""
        assert normalize_remote_root(remote_root) == expected

    def test_trailing_dot_does_not_double_separator(self):
        """A root given with a trailing dot maps like one without."""
        root = normalize_remote_root("user.root.")
        assert map_path("a/x.c", root) == "USER.ROOT.A(X)"
