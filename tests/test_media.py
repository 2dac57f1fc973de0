from ytmenu.media import (download_command, local_media, playable, player_command,
                          shuffle_command)


class TestPlayerCommand:
    """Tests for mpv command lines."""

    def test_plain(self):
        assert player_command(["https://y/watch?v=a"]) == ["mpv", "https://y/watch?v=a"]

    def test_all_options(self):
        cmd = player_command(["a.mp3"], device="hw:1,0", audio_only=True, shuffle=True)

        assert cmd == ["mpv", "--shuffle", "--audio-device=alsa/hw:1,0", "--no-video", "a.mp3"]

    def test_playable_url(self):
        assert playable("https://www.youtube.com/watch?v=a") == "https://www.youtube.com/watch?v=a"

    def test_playable_bare_id(self):
        assert playable("dQw4w9WgXcQ") == "ytdl://dQw4w9WgXcQ"

    def test_playable_local_file(self, tmp_path):
        path = tmp_path / "song.mp3"
        path.write_bytes(b"")

        assert playable(str(path)) == str(path)


class TestDownloadCommand:
    """Tests for yt-dlp download command lines."""

    def test_audio(self):
        assert download_command("u", audio_only=True) == [
            "yt-dlp", "-x", "--audio-format", "mp3", "-o", "%(title)s.%(ext)s", "u",
        ]

    def test_video(self):
        assert download_command("u", audio_only=False) == [
            "yt-dlp", "-f", "bestvideo[height<=720]+bestaudio/best[height<=720]",
            "--merge-output-format", "mp4", "-o", "%(title)s.%(ext)s", "u",
        ]


class TestLocalMedia:
    """Tests for finding downloaded files."""

    def setup_method(self):
        self.names = ["b.mp3", "a.mp3", "clip.mp4", "notes.txt"]

    def _populate(self, directory):
        for name in self.names:
            (directory / name).write_bytes(b"")
        (directory / "folder.mp3").mkdir()

    def test_audio_files(self, tmp_path):
        self._populate(tmp_path)

        assert local_media(tmp_path, audio_only=True) == [str(tmp_path / "a.mp3"), str(tmp_path / "b.mp3")]

    def test_video_files(self, tmp_path):
        self._populate(tmp_path)

        assert local_media(tmp_path, audio_only=False) == [str(tmp_path / "clip.mp4")]

    def test_shuffle_without_files(self, tmp_path):
        assert shuffle_command(tmp_path, "default", audio_only=True) is None

    def test_shuffle_video(self, tmp_path):
        self._populate(tmp_path)

        assert shuffle_command(tmp_path, "default", audio_only=False) == [
            "mpv", "--shuffle", str(tmp_path / "clip.mp4"),
        ]
