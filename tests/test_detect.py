import pytest

from stardew_mcp_installer.lib.detect import candidate_paths, detect_game_path

ENV = {"HOME": "/home/farmer", "LocalAppData": r"C:\Users\farmer\AppData\Local"}


class TestCandidates:
    def test_linux_order(self):
        assert candidate_paths("Linux", ENV) == [
            "/home/farmer/.local/share/Steam/steamapps/common/Stardew Valley",
            "/home/farmer/.steam/steamapps/common/Stardew Valley",
            "/opt/stardew-valley",
        ]

    def test_windows_uses_local_app_data(self):
        paths = candidate_paths("Windows", ENV)
        assert len(paths) == 4
        assert paths[2] == r"C:\Users\farmer\AppData\Local\StardewValley"

    def test_darwin(self):
        assert candidate_paths("Darwin", ENV)[1] == (
            "/home/farmer/Applications/Stardew Valley.app/Contents/MacOS"
        )

    def test_missing_env_var_does_not_raise(self):
        paths = candidate_paths("linux", {})
        assert paths[:2] == ["", ""]
        assert paths[2] == "/opt/stardew-valley"

    def test_unknown_platform(self):
        assert candidate_paths("Plan9", ENV) == []


class TestDetect:
    @pytest.mark.parametrize("system", ["Windows", "Linux"])
    def test_returns_third_candidate(self, system):
        third = candidate_paths(system, ENV)[2]
        assert detect_game_path(system, environ=ENV, exists=lambda p: p == third) == third

    def test_first_match_wins(self):
        assert detect_game_path("Linux", environ=ENV, exists=lambda p: True) == (
            "/home/farmer/.local/share/Steam/steamapps/common/Stardew Valley"
        )

    def test_none_exist(self):
        assert detect_game_path("Linux", environ=ENV, exists=lambda p: False) is None

    def test_empty_candidates_are_never_probed(self):
        probed = []

        def exists(p):
            probed.append(p)
            return False

        detect_game_path("Linux", environ={}, exists=exists)
        assert probed == ["/opt/stardew-valley"]

    def test_real_filesystem(self, tmp_path):
        game = tmp_path / ".steam/steamapps/common/Stardew Valley"
        game.mkdir(parents=True)
        assert detect_game_path("Linux", environ={"HOME": str(tmp_path)}) == str(game)
