"""Tests for the matchers module."""
from __future__ import annotations

import re

import pytest

from organize_pics.errors import NotRecognizedError
from organize_pics.matchers import classify
from organize_pics.matchers import find_matcher
from organize_pics.matchers import MatcherDefinition
from organize_pics.matchers import MATCHERS
from organize_pics.matchers import MediaDate


class TestClassify:
    """Tests for the classify function."""

    @pytest.mark.parametrize(
        ('filename', 'expected'),
        [
            ('IMG_20210222_213525.jpg', '2021-02-22'),
            ('VID_20201012_124124.mp4', '2020-10-12'),
            ('VID_20201012_124124_325_someextrastuff.mp4', '2020-10-12'),
            ('PXL_20210123_124124.mp4', '2021-01-23'),
            ('PXL_19891211_124124.jpg', '1989-12-11'),
            ('C360_2019-07-17-04-02-45-169.jpg', '2019-07-17'),
            ('20170402_1979.jpg', '2017-04-02'),
            ('20181030_1985.mp4', '2018-10-30'),
            ('Screenshot_20200101_foo.jpg', '2020-01-01'),
        ],
    )
    def test_recognized_names(self, filename: str, expected: str) -> None:
        """Test that known conventions map to their date folder."""
        assert classify(filename) == expected

    @pytest.mark.parametrize(
        'filename',
        [
            '1234',
            '',
            'C360_2019-07-17-04-02-45-169-12.jpg',
            'C360_2019-07-17-169.jpg',
            'IMG_2021022_213525.jpg',
            'IMG_20210222_213525.png',
            'VID_20201012_124124.jpg',
            'img_20210222_213525.jpg',
            'Screenshot_20200101_foo.png',
            'notes.txt',
        ],
    )
    def test_unrecognized_names(self, filename: str) -> None:
        """Test that names outside the conventions are rejected."""
        with pytest.raises(NotRecognizedError) as exc_info:
            classify(filename)

        assert exc_info.value.filename == filename
        assert repr(filename) in str(exc_info.value)

    @pytest.mark.parametrize('prefix', ['IMG', 'PXL'])
    def test_jpg_prefixes_regroup_date_digits(self, prefix: str) -> None:
        """Test that the 8 date digits come back grouped 4-2-2."""
        for digits in ['20000101', '19991231', '12345678']:
            folder = classify(f'{prefix}_{digits}_0001.jpg')

            assert folder == f'{digits[:4]}-{digits[4:6]}-{digits[6:]}'
            assert folder.replace('-', '') == digits

    @pytest.mark.parametrize('prefix', ['VID', 'PXL'])
    def test_mp4_prefixes_regroup_date_digits(self, prefix: str) -> None:
        """Test that the 8 date digits come back grouped 4-2-2 for videos."""
        assert classify(f'{prefix}_20240229_235959.mp4') == '2024-02-29'

    def test_date_is_not_validated(self) -> None:
        """Test that the digits are used as-is, even if not a calendar date."""
        assert classify('IMG_20211399_1.jpg') == '2021-13-99'

    def test_non_ascii_digits_rejected(self) -> None:
        """Test that only ASCII digits count as digits."""
        with pytest.raises(NotRecognizedError):
            classify('IMG_２０２１０２２２_213525.jpg')

    def test_trailing_newline_rejected(self) -> None:
        """Test that the extension must end the name."""
        with pytest.raises(NotRecognizedError):
            classify('IMG_20210222_213525.jpg\n')

    def test_camera_prefix_not_anchored(self) -> None:
        """Test that camera names are found after a leading prefix."""
        assert classify('backupIMG_20210222_213525.jpg') == '2021-02-22'

    @pytest.mark.parametrize(
        'filename',
        [
            'foo_IMG_20210222_213525.jpg',
            'a_b_VID_20210222_213525.mp4',
            'copy_of_PXL_20210222_213525.mp4',
        ],
    )
    def test_underscore_before_camera_prefix(self, filename: str) -> None:
        """Test that the date comes from the digits after the camera prefix."""
        assert classify(filename) == '2021-02-22'

    def test_date_read_from_recognizing_rule(self) -> None:
        """Test that an earlier lookalike date does not win over the matching rule."""
        assert classify('IMG_20190101_VID_20210222_1.mp4') == '2021-02-22'

    def test_date_prefixed_is_anchored(self) -> None:
        """Test that the bare date convention must start the name."""
        with pytest.raises(NotRecognizedError):
            classify('x20170402_1979.jpg')

    def test_c360_is_anchored_at_start(self) -> None:
        """Test that C360 names must start with the C360 token."""
        with pytest.raises(NotRecognizedError):
            classify('copy_C360_2019-07-17-04-02-45-169.jpg')

    def test_matching_uses_name_as_given(self) -> None:
        """Test that directory components are not stripped."""
        with pytest.raises(NotRecognizedError):
            classify('photos/20170402_1979.jpg')


class TestFindMatcher:
    """Tests for registry lookup."""

    def test_registry_order(self) -> None:
        """Test the priority order of the built-in conventions."""
        assert [m.name for m in MATCHERS] == ['camera', 'c360', 'date-prefixed', 'screenshot']

    @pytest.mark.parametrize(
        ('filename', 'name'),
        [
            ('IMG_20210222_213525.jpg', 'camera'),
            ('C360_2019-07-17-04-02-45-169.jpg', 'c360'),
            ('20170402_1979.mp4', 'date-prefixed'),
            ('Screenshot_20200101_foo.jpg', 'screenshot'),
        ],
    )
    def test_finds_convention(self, filename: str, name: str) -> None:
        """Test that each convention is found by name."""
        matcher = find_matcher(filename)

        assert matcher is not None
        assert matcher.name == name

    def test_no_match(self) -> None:
        """Test that unknown names return None."""
        assert find_matcher('1234') is None

    def test_first_match_wins(self) -> None:
        """Test that the earliest matching definition decides the folder."""
        first = MatcherDefinition(
            name='first',
            description='anything ending in .jpg',
            patterns=(re.compile(r'\.jpg$'),),
            extract_date=lambda filename: MediaDate('2000', '01', '01'),
        )
        second = MatcherDefinition(
            name='second',
            description='also anything ending in .jpg',
            patterns=(re.compile(r'\.jpg$'),),
            extract_date=lambda filename: MediaDate('1999', '12', '31'),
        )

        assert find_matcher('a.jpg', (first, second)) is first
        assert classify('a.jpg', (first, second)) == '2000-01-01'
        assert classify('a.jpg', (second, first)) == '1999-12-31'

    def test_empty_registry(self) -> None:
        """Test that nothing is recognized without matchers."""
        with pytest.raises(NotRecognizedError):
            classify('IMG_20210222_213525.jpg', ())


class TestMatcherDefinition:
    """Tests for individual matcher definitions."""

    def test_any_pattern_matches(self) -> None:
        """Test that the recognition patterns are OR-ed."""
        camera = MATCHERS[0]

        assert camera.matches('IMG_20210222_1.jpg') is True
        assert camera.matches('VID_20210222_1.mp4') is True
        assert camera.matches('PXL_20210222_1.jpg') is True
        assert camera.matches('PXL_20210222_1.mp4') is True
        assert camera.matches('DSC_20210222_1.jpg') is False

    def test_extract_date(self) -> None:
        """Test that extractors return zero padded strings."""
        c360 = MATCHERS[1]

        date = c360.extract_date('C360_2019-07-17-04-02-45-169.jpg')

        assert date == MediaDate('2019', '07', '17')
        assert date.folder_name == '2019-07-17'
        assert c360.folder_name('C360_2019-07-17-04-02-45-169.jpg') == '2019-07-17'

    def test_extract_date_rejects_unrecognized(self) -> None:
        """Test that extracting from a name without a date fails loudly."""
        with pytest.raises(ValueError):
            MATCHERS[0].extract_date('notes.txt')

    def test_extract_date_is_pure(self) -> None:
        """Test that repeated extraction gives the same result."""
        screenshot = MATCHERS[3]
        name = 'Screenshot_20200101_foo.jpg'

        assert screenshot.extract_date(name) == screenshot.extract_date(name)

    def test_definitions_are_frozen(self) -> None:
        """Test that registry entries cannot be changed."""
        with pytest.raises(AttributeError):
            MATCHERS[0].name = 'other'  # type: ignore[misc]
