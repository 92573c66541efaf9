"""Tests for the CSV training set loader."""

import os

import numpy as np
import pytest

from knn_scratch.datasets.csv_dataset import load_points, points_to_arrays
from knn_scratch.errors import MalformedInputError
from knn_scratch.point import Point


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a CSV file and return its path."""

    def _write(text: str, name: str = "data.csv"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


def test_load_with_header(write_csv):
    """Feature columns come first and the label last."""
    path = write_csv("x,y,label\n1.0,2.0,A\n2.0,3.0,A\n8.0,8.0,C\n")
    points = load_points(path)
    assert points == [
        Point((1.0, 2.0), "A"),
        Point((2.0, 3.0), "A"),
        Point((8.0, 8.0), "C"),
    ]


def test_load_without_header(write_csv):
    """The first line is data when there is no header."""
    path = write_csv("1,2,A\n3,4,B\n")
    points = load_points(path, has_header=False)
    assert [p.label for p in points] == ["A", "B"]
    assert points[1].features == (3.0, 4.0)


def test_more_than_two_features(write_csv):
    """Any number of feature columns from two up is accepted."""
    path = write_csv("a,b,c,d,label\n1,2,3,4,setosa\n")
    (point,) = load_points(path)
    assert point.features == (1.0, 2.0, 3.0, 4.0)
    assert point.label == "setosa"


def test_custom_delimiter(write_csv):
    """Semicolon separated files load with a delimiter."""
    path = write_csv("x;y;label\n1.5;2.5;A\n")
    assert load_points(path, delimiter=";") == [Point((1.5, 2.5), "A")]


def test_numeric_labels_stay_strings(write_csv):
    """Labels are opaque and never converted."""
    path = write_csv("x,y,label\n1,2,7\n")
    assert load_points(path)[0].label == "7"


def test_whitespace_is_stripped(write_csv):
    """Spaces around values are ignored."""
    path = write_csv("x, y, label\n 1.0, 2.0, A \n")
    assert load_points(path) == [Point((1.0, 2.0), "A")]


def test_missing_file(tmp_path):
    """A missing file is malformed input."""
    with pytest.raises(MalformedInputError):
        load_points(tmp_path / "missing.csv")


def test_empty_file(write_csv):
    """An empty file is malformed input."""
    with pytest.raises(MalformedInputError):
        load_points(write_csv(""))


def test_too_few_columns(write_csv):
    """A single feature column is not enough."""
    with pytest.raises(MalformedInputError):
        load_points(write_csv("x,label\n1.0,A\n"))


def test_non_numeric_feature(write_csv):
    """The offending line is named in the error."""
    path = write_csv("x,y,label\n1.0,2.0,A\n1.0,abc,B\n")
    with pytest.raises(MalformedInputError, match="line 3"):
        load_points(path)


def test_missing_feature(write_csv):
    """A short record is rejected."""
    path = write_csv("x,y,label\n1.0,2.0,A\n1.0,,B\n")
    with pytest.raises(MalformedInputError):
        load_points(path)


def test_missing_label(write_csv):
    """A record without a label is rejected."""
    path = write_csv("x,y,label\n1.0,2.0,\n")
    with pytest.raises(MalformedInputError):
        load_points(path)


def test_points_to_arrays():
    """Points split into a feature matrix and labels."""
    points = [Point((1.0, 2.0), "A"), Point((3.0, 4.0), "B")]
    features, labels = points_to_arrays(points)
    assert features.shape == (2, 2)
    assert np.asarray(features).tolist() == [[1.0, 2.0], [3.0, 4.0]]
    assert labels.tolist() == ["A", "B"]


def test_extra_field_on_every_data_line(write_csv):
    """A surplus field is rejected, never taken as an index column."""
    path = write_csv("x,y,label\n1,2,3,A\n4,5,6,B\n")
    with pytest.raises(MalformedInputError):
        load_points(path)


def test_extra_field_on_one_line(write_csv):
    """A single over-long record is rejected."""
    path = write_csv("x,y,label\n1,2,A\n4,5,6,B\n")
    with pytest.raises(MalformedInputError):
        load_points(path)


def test_header_only(write_csv):
    """A header without records yields no points."""
    assert load_points(write_csv("x,y,label\n")) == []


def test_directory_path(tmp_path):
    """A directory is not a training file."""
    with pytest.raises(MalformedInputError):
        load_points(tmp_path)


def test_invalid_utf8(tmp_path):
    """Undecodable bytes are malformed input."""
    path = tmp_path / "data.csv"
    path.write_bytes(b"x,y,label\n1,2,\xff\xfe\n")
    with pytest.raises(MalformedInputError):
        load_points(path)


@pytest.mark.skipif(os.geteuid() == 0, reason="root can read any file")
def test_unreadable_file(write_csv):
    """A file without read permission is malformed input."""
    path = write_csv("x,y,label\n1,2,A\n")
    path.chmod(0)
    try:
        with pytest.raises(MalformedInputError):
            load_points(path)
    finally:
        path.chmod(0o644)
