import unittest

from zoipack.errors import (
    InvalidBranchToken,
    InvalidBumpPart,
    InvalidTrack,
    InvalidVersionFormat,
)
from zoipack.version_policy import (
    SemVer,
    Track,
    next_version,
    resolve_branch,
    resolve_track,
    validate,
)


class TestValidate(unittest.TestCase):

    def test_accepts_plain_versions(self):
        self.assertEqual(validate("1.2.3"), SemVer(1, 2, 3))
        self.assertEqual(validate("0.0.1"), SemVer(0, 0, 1))

    def test_accepts_prerelease_and_build(self):
        version = validate("1.2.3-beta.1+build.5")
        self.assertEqual(version.core, (1, 2, 3))
        self.assertEqual(version.prerelease, "beta.1")
        self.assertEqual(version.build, "build.5")
        self.assertEqual(str(version), "1.2.3-beta.1+build.5")

    def test_rejects_malformed_versions(self):
        for text in ["1.2", "v1.2.3", "1.2.3.4", "", "01.2.3", "1.2.3-", " 1.2.3", "1.2.3\n"]:
            with self.subTest(text=text):
                with self.assertRaises(InvalidVersionFormat):
                    validate(text)

    def test_rejects_non_string(self):
        with self.assertRaises(InvalidVersionFormat):
            validate(None)

    def test_invalid_version_is_a_value_error(self):
        with self.assertRaises(ValueError):
            validate("1.2")


class TestNextVersion(unittest.TestCase):

    def test_standard_increments(self):
        self.assertEqual(next_version("1.2.3", "major"), SemVer(2, 0, 0))
        self.assertEqual(next_version("1.2.3", "minor"), SemVer(1, 3, 0))
        self.assertEqual(next_version("1.2.3", "patch"), SemVer(1, 2, 4))

    def test_accepts_semver_instance(self):
        self.assertEqual(next_version(SemVer(0, 9, 9), "minor"), SemVer(0, 10, 0))

    def test_prerelease_promotes_to_release(self):
        self.assertEqual(next_version("1.2.3-beta", "patch"), SemVer(1, 2, 3))
        self.assertEqual(next_version("1.2.0-rc.1", "minor"), SemVer(1, 2, 0))
        self.assertEqual(next_version("2.0.0-alpha", "major"), SemVer(2, 0, 0))
        self.assertEqual(next_version("1.2.3-beta", "minor"), SemVer(1, 3, 0))

    def test_result_drops_metadata(self):
        self.assertEqual(str(next_version("1.2.3+sha.abc", "patch")), "1.2.4")

    def test_every_bump_strictly_increases(self):
        versions = ["0.0.0", "0.0.1", "1.2.3", "1.0.0-beta", "1.2.0-rc.1", "3.9.9+meta", "10.0.0-alpha.2"]
        for text in versions:
            for part in ("major", "minor", "patch"):
                with self.subTest(version=text, part=part):
                    current = validate(text)
                    bumped = next_version(current, part)
                    self.assertGreater(bumped.precedence_key(), current.precedence_key())

    def test_consecutive_patch_bumps_do_not_skip(self):
        first = next_version("4.5.6", "patch")
        second = next_version(first, "patch")
        self.assertEqual(first, SemVer(4, 5, 7))
        self.assertEqual(second, SemVer(4, 5, 8))

    def test_unknown_part(self):
        with self.assertRaises(InvalidBumpPart):
            next_version("1.2.3", "build")

    def test_unparseable_current(self):
        with self.assertRaises(InvalidVersionFormat):
            next_version("one.two.three", "patch")


class TestPrecedence(unittest.TestCase):

    def test_prerelease_ordering(self):
        ordered = ["1.0.0-alpha", "1.0.0-alpha.1", "1.0.0-alpha.beta", "1.0.0-beta",
                   "1.0.0-beta.2", "1.0.0-beta.11", "1.0.0-rc.1", "1.0.0"]
        keys = [validate(text).precedence_key() for text in ordered]
        self.assertEqual(keys, sorted(keys))

    def test_build_metadata_ignored(self):
        self.assertEqual(validate("1.0.0+a").precedence_key(), validate("1.0.0+b").precedence_key())


class TestTracks(unittest.TestCase):

    def test_resolve_track(self):
        self.assertIs(resolve_track("prod"), Track.PROD)
        self.assertIs(resolve_track("dev"), Track.DEV)
        self.assertEqual(Track.PROD.json_key, "production")
        self.assertEqual(Track.DEV.json_key, "development")
        self.assertEqual(Track.DEV.tag_prefix, "Dev")

    def test_resolve_track_rejects_other_tokens(self):
        for token in ["production", "stable", "", "PROD"]:
            with self.subTest(token=token):
                with self.assertRaises(InvalidTrack):
                    resolve_track(token)

    def test_resolve_branch(self):
        self.assertEqual(resolve_branch("dev"), "Development")
        self.assertEqual(resolve_branch("prod"), "Production")

    def test_resolve_branch_rejects_other_tokens(self):
        with self.assertRaises(InvalidBranchToken):
            resolve_branch("main")


if __name__ == '__main__':
    unittest.main()
