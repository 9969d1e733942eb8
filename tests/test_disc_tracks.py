import unittest
from pathlib import Path

from cddb_file.disc import Disc
from cddb_file.lines import LineStore
from cddb_file.models import FormatError, Track

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def _fixture(name: str) -> Disc:
    return Disc.from_path(FIXTURE_DIR / name, encoding="utf-8")


def _header(*offsets: int) -> list[str]:
    return ["# xmcd", "#", "# Track frame offsets:"] + [f"# {o}" for o in offsets] + ["#"]


class TestVeronikaFixture(unittest.TestCase):
    def setUp(self) -> None:
        self.disc = _fixture("classical_f4109511")

    def test_disc_fields(self) -> None:
        self.assertEqual(self.disc.id, "f4109511")
        self.assertEqual(self.disc.title, "The double life of Veronika/Kieslowski")
        self.assertEqual(self.disc.artist, "Zbigniew Preisner")
        self.assertEqual(self.disc.year, "1991")
        self.assertEqual(self.disc.genre, "Classical")
        self.assertEqual(self.disc.length_seconds, 1869)
        self.assertEqual(self.disc.revision, "3")
        self.assertEqual(self.disc.submitted_by, "Grip 2.95")
        self.assertEqual(self.disc.track_count, 18)
        self.assertEqual(
            self.disc.extended_text,
            "Soundtrack of the film by Krzysztof Kieslowski. "
            "Performed by the Sinfonia Varsovia, conducted by Jacek Kaspszyk.",
        )

    def test_first_and_last_tracks(self) -> None:
        tracks = self.disc.tracks()
        self.assertEqual(len(tracks), self.disc.track_count)
        self.assertEqual(
            tracks[0],
            Track(number=1, title="Weronika", extended_text="Opening song", length_seconds=40),
        )
        self.assertEqual(tracks[17].number, 18)
        self.assertEqual(tracks[17].length_seconds, 85)
        self.assertEqual(tracks[17].extended_text, "Closing titles")

    def test_continued_track_title_is_reassembled(self) -> None:
        track = self.disc.tracks()[12]
        self.assertEqual(track.number, 13)
        self.assertEqual(
            track.title,
            "Van den Budenmayer: Concerto en mi mineur, version de 1802, "
            "Zbigniew Preisner, Sinfonia Varsovia, Jacek Kaspszyk",
        )

    def test_non_ascii_title(self) -> None:
        self.assertEqual(self.disc.tracks()[1].title, "Kraków")

    def test_track_lengths_fit_disc_length(self) -> None:
        total = sum(track.length_seconds for track in self.disc.tracks())
        self.assertLessEqual(total, self.disc.length_seconds)
        self.assertLessEqual(self.disc.length_seconds - total, self.disc.track_count)

    def test_tracks_are_equal_across_calls(self) -> None:
        self.assertEqual(self.disc.tracks(), self.disc.tracks())

    def test_str_of_track_is_title(self) -> None:
        self.assertEqual(str(self.disc.tracks()[0]), "Weronika")

    def test_frame_offsets(self) -> None:
        offsets = self.disc.frame_offsets
        self.assertEqual(len(offsets), 18)
        self.assertEqual(offsets[0], 150)
        self.assertEqual(offsets[-1], 133800)


class TestMultipleIdFixture(unittest.TestCase):
    def setUp(self) -> None:
        self.disc = _fixture("rock_2203fd04")

    def test_ids(self) -> None:
        self.assertEqual(len(self.disc.all_ids), 2)
        self.assertEqual(self.disc.id, "2203fd04")
        self.assertEqual(self.disc.all_ids[1], "af10420e")

    def test_eponymous_artist(self) -> None:
        self.assertEqual(self.disc.artist, "Metallica")
        self.assertEqual(self.disc.title, "Metallica")

    def test_track_length_from_offset_pair(self) -> None:
        tracks = self.disc.tracks()
        self.assertEqual(tracks[1].title, "Sad but True")
        self.assertEqual(tracks[1].length_seconds, 180 + 43)
        self.assertEqual([t.length_seconds for t in tracks], [250, 223, 290, 257])


class TestTrackDerivation(unittest.TestCase):
    def test_missing_indices_keep_their_slot(self) -> None:
        lines = _header(150, 7650, 15150) + [
            "# Disc length: 300 seconds",
            "TTITLE0=One",
            "TTITLE2=Three",
        ]
        disc = Disc(LineStore(lines))
        tracks = disc.tracks()
        self.assertEqual(disc.track_count, 3)
        self.assertEqual([t.title for t in tracks], ["One", "", "Three"])
        self.assertEqual([t.number for t in tracks], [1, 2, 3])
        self.assertEqual([t.length_seconds for t in tracks], [100, 100, 98])

    def test_highest_index_not_last_line(self) -> None:
        lines = _header(150, 7650) + [
            "# Disc length: 200 seconds",
            "TTITLE1=Two",
            "TTITLE0=One",
        ]
        disc = Disc(LineStore(lines))
        self.assertEqual(disc.track_count, 2)
        self.assertEqual(disc.multi_field("TTITLE"), ["One", "Two"])

    def test_ttitle_without_digits_is_ignored(self) -> None:
        lines = _header(150) + ["# Disc length: 60 seconds", "TTITLE0=One", "TTITLEX=bogus", "TTITLE=bogus"]
        self.assertEqual(Disc(LineStore(lines)).track_count, 1)

    def test_no_track_titles_raises_format_error(self) -> None:
        disc = Disc(LineStore(_header(150) + ["# Disc length: 60 seconds"]))
        with self.assertRaises(FormatError):
            disc.tracks()
        with self.assertRaises(FormatError):
            disc.track_count

    def test_too_few_offset_lines_raises_format_error(self) -> None:
        lines = _header(150) + ["# Disc length: 60 seconds", "TTITLE0=One", "TTITLE1=Two"]
        disc = Disc(LineStore(lines))
        with self.assertRaises(FormatError):
            disc.tracks()

    def test_file_shorter_than_offset_block_raises_format_error(self) -> None:
        disc = Disc(LineStore(["# xmcd", "TTITLE0=One"]))
        with self.assertRaises(FormatError):
            disc.frame_offsets

    def test_offset_line_requires_whitespace_after_hash(self) -> None:
        lines = ["# xmcd", "#", "# Track frame offsets:", "#150", "# Disc length: 60 seconds", "TTITLE0=One"]
        with self.assertRaises(FormatError):
            Disc(LineStore(lines)).frame_offsets

    def test_tracks_with_bad_disc_length_raise_format_error(self) -> None:
        lines = _header(150) + ["# Disc length: n/a", "TTITLE0=One"]
        with self.assertRaises(FormatError):
            Disc(LineStore(lines)).tracks()

    def test_non_ascii_track_index_is_ignored(self) -> None:
        lines = _header(150, 750) + [
            "# Disc length: 30 seconds",
            "TTITLE0=One",
            "TTITLE\u0661=Two",
        ]
        disc = Disc(LineStore(lines))
        self.assertEqual(disc.track_count, 1)
        self.assertEqual([t.title for t in disc.tracks()], ["One"])

    def test_non_ascii_disc_length_raises_format_error(self) -> None:
        lines = _header(150) + ["# Disc length: \u0661\u0668\u0666\u0669 seconds", "TTITLE0=One"]
        with self.assertRaises(FormatError):
            Disc(LineStore(lines)).length_seconds

    def test_non_ascii_frame_offset_raises_format_error(self) -> None:
        lines = ["# xmcd", "#", "# Track frame offsets:", "# \u0661\u0665\u0660", "TTITLE0=One"]
        with self.assertRaises(FormatError):
            Disc(LineStore(lines)).frame_offsets

    def test_offset_past_disc_end_is_logged(self) -> None:
        lines = _header(150, 9000) + ["# Disc length: 100 seconds", "TTITLE0=One", "TTITLE1=Two"]
        disc = Disc(LineStore(lines))
        with self.assertLogs("cddb_file.disc", level="DEBUG") as logs:
            lengths = [t.length_seconds for t in disc.tracks()]
        self.assertEqual(lengths, [118, -20])
        self.assertTrue(any("past the disc end" in line for line in logs.output))

    def test_extended_track_text(self) -> None:
        lines = _header(150, 750) + [
            "# Disc length: 30 seconds",
            "TTITLE0=One",
            "TTITLE1=Two",
            "EXTT1=live ",
            "EXTT1=recording",
        ]
        tracks = Disc(LineStore(lines)).tracks()
        self.assertEqual(tracks[0].extended_text, "")
        self.assertEqual(tracks[1].extended_text, "live recording")


if __name__ == "__main__":
    unittest.main()
