from pathlib import Path

from playlist_converter.domain.errors import OutputError, PlaylistError
from playlist_converter.domain.models import ClassifiedTask, TaskKind, WorkBatch
from playlist_converter.planner import partition_playlist, plan


def _names(tasks):
    return [task.output_path.name for task in tasks]


def test_mixed_playlist_is_partitioned_and_rewritten(tmp_path, write_playlist):
    """
    Given a playlist with [a.mp3, b.wav, c.ogg],
    When it is planned,
    Then a.mp3 is copied, b and c are converted,
    And the output playlist lists all three as backslash .mp3 paths.
    """
    playlist = write_playlist("mix.m3u", ["a.mp3", "sub/b.wav", "c.ogg"], tmp_path / "in")
    output = tmp_path / "out"
    output.mkdir()

    result = plan([playlist], output)

    assert result.is_right()
    batch = result.value
    assert [t.input_path for t in batch.copy_tasks] == [playlist.parent / "a.mp3"]
    assert [t.output_path for t in batch.convert_tasks] == [output / "sub/b.mp3", output / "c.mp3"]
    assert all(t.kind is TaskKind.CONVERT for t in batch.convert_tasks)

    lines = (output / "mix.m3u").read_text(encoding="utf-8").splitlines()
    assert lines == ["a.mp3", "sub\\b.mp3", "c.mp3"]
    for line in lines:
        assert line.endswith(".mp3")
        assert "/" not in line
        assert not line.endswith("\\")


def test_url_entries_are_dropped(tmp_path, write_playlist, caplog):
    playlist = write_playlist("web.m3u", ["a.flac", "http://example.com/song.mp3", "b.mp3"])
    output = tmp_path / "out"
    output.mkdir()

    batch = plan([playlist], output).value

    assert batch.total == 2
    assert "Ignoring URL: http://example.com/song.mp3" in caplog.text
    assert (output / "web.m3u").read_text(encoding="utf-8").splitlines() == ["a.mp3", "b.mp3"]


def test_entries_without_extension_are_dropped(tmp_path, write_playlist, caplog):
    playlist = write_playlist("noext.m3u", ["noext", "a.flac"])
    output = tmp_path / "out"
    output.mkdir()

    batch = plan([playlist], output).value

    assert _names(batch.convert_tasks) == ["a.mp3"]
    assert batch.copy_tasks == []
    assert "noext: Failed to determine file extension" in caplog.text
    assert (output / "noext.m3u").read_text(encoding="utf-8") == "a.mp3\n"


def test_undecodable_entry_is_skipped(tmp_path, caplog):
    playlist = tmp_path / "bad.m3u"
    playlist.write_bytes(b"a.mp3\n\xff.wav\nb.wav\n")
    output = tmp_path / "out"
    output.mkdir()

    batch = plan([playlist], output).value

    assert batch.total == 2
    assert "Failed to read playlist entry" in caplog.text


def test_two_playlists_produce_two_outputs_in_order(tmp_path, write_playlist):
    """
    Given two playlists on the command line,
    When they are planned,
    Then each gets its own output playlist with the same name,
    And the work lists follow playlist-then-entry order.
    """
    first = write_playlist("first.m3u", ["1.flac", "2.mp3", "3.wav"], tmp_path / "a")
    second = write_playlist("second.m3u8", ["4.mp3", "5.ogg"], tmp_path / "b")
    output = tmp_path / "out"
    output.mkdir()

    batch = plan([first, second], output).value

    assert _names(batch.convert_tasks) == ["1.mp3", "3.mp3", "5.mp3"]
    assert _names(batch.copy_tasks) == ["2.mp3", "4.mp3"]
    assert batch.convert_tasks[2].input_path == tmp_path / "b" / "5.ogg"
    assert (output / "first.m3u").read_text(encoding="utf-8").splitlines() == ["1.mp3", "2.mp3", "3.mp3"]
    assert (output / "second.m3u8").read_text(encoding="utf-8").splitlines() == ["4.mp3", "5.mp3"]


def test_partition_appends_to_existing_batch(tmp_path, write_playlist):
    playlist = write_playlist("list.m3u", ["x.mp3"])
    output = tmp_path / "out"
    output.mkdir()
    batch = WorkBatch()
    batch.add(ClassifiedTask(Path("y.mp3"), output / "y.mp3", TaskKind.COPY, "y.mp3"))

    result = partition_playlist(playlist, batch, output)

    assert result.value is batch
    assert _names(batch.copy_tasks) == ["y.mp3", "x.mp3"]


def test_missing_input_playlist_is_fatal(tmp_path, write_playlist):
    """
    Given a second playlist that does not exist,
    When the playlists are planned,
    Then the result is a PlaylistError and no output is written for it.
    """
    good = write_playlist("good.m3u", ["a.mp3"])
    output = tmp_path / "out"
    output.mkdir()

    result = plan([good, tmp_path / "missing.m3u"], output)

    assert result.is_left()
    error, _ = result.monoid
    assert isinstance(error, PlaylistError)
    assert (output / "good.m3u").exists()
    assert not (output / "missing.m3u").exists()


def test_unwritable_output_playlist_is_fatal(tmp_path, write_playlist):
    playlist = write_playlist("list.m3u", ["a.mp3"])

    result = plan([playlist], tmp_path / "does-not-exist")

    assert result.is_left()
    error, _ = result.monoid
    assert isinstance(error, OutputError)


def test_playlist_in_current_directory(tmp_path, write_playlist, monkeypatch):
    write_playlist("here.m3u", ["a.flac"])
    monkeypatch.chdir(tmp_path)
    Path("out").mkdir()

    batch = plan([Path("here.m3u")], Path("out")).value

    assert batch.convert_tasks[0].input_path == Path("a.flac")
    assert Path("out/here.m3u").read_text(encoding="utf-8") == "a.mp3\n"
