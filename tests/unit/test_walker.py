"""Tests for bounded directory traversal."""

from depscout.walker import walk


class TestWalk:
    def test_breadth_first_order(self, make_tree):
        root = make_tree({
            "b/deep/x.txt": "",
            "a/y.txt": "",
            "root.txt": "",
        })
        listings = list(walk(root, max_depth=3))

        assert [listing.depth for listing in listings] == [0, 1, 1, 2]
        assert [listing.path.name for listing in listings[1:]] == ["a", "b", "deep"]
        assert listings[0].files == ("root.txt",)
        assert listings[0].directories == ("a", "b")

    def test_max_depth(self, make_tree):
        root = make_tree({"a/b/c/file.txt": ""})
        depths = [listing.depth for listing in walk(root, max_depth=1)]
        assert depths == [0, 1]

    def test_ignored_directories(self, make_tree):
        root = make_tree({
            "node_modules/pkg/package.json": "{}",
            "__pycache__/mod.pyc": "",
            "src/main.py": "",
        })
        listings = list(walk(root, max_depth=3))
        assert listings[0].directories == ("src",)
        assert [listing.path.name for listing in listings[1:]] == ["src"]

    def test_missing_root(self, tmp_path):
        assert list(walk(tmp_path / "missing", max_depth=2)) == []
