import pytest

from umkatools.mkdirs import (
    main_dirrange,
    main_doubledirs,
    make_dir_range,
    make_double_dirs,
    range_dir_names,
)


def test_range_first_name():
    assert list(range_dir_names(0, 1, 1, 1)) == ["d0000000000_x"]


def test_range_names_shape():
    names = list(range_dir_names(5, 9, 2, 3))
    assert len(names) == 4
    for number, name in zip(range(5, 9), names):
        assert name[0] == "d"
        assert int(name[1:11]) == number
        assert name[11] == "_"
        assert set(name[12:]) == {"x"}
        assert 2 <= len(name[12:]) < 5


def test_range_empty():
    assert list(range_dir_names(7, 7, 1, 1)) == []


def test_range_bad_pat_max():
    with pytest.raises(ValueError):
        list(range_dir_names(0, 3, 1, 0))


def test_make_dir_range(tmp_path):
    created = make_dir_range(tmp_path, 0, 4, 1, 3)
    assert sorted(p.name for p in tmp_path.iterdir()) == sorted(created)
    assert all((tmp_path / name).is_dir() for name in created)


def test_make_dir_range_existing(tmp_path):
    make_dir_range(tmp_path, 0, 2, 1, 1)
    with pytest.raises(FileExistsError):
        make_dir_range(tmp_path, 0, 2, 1, 1)


def test_make_dir_range_missing_root(tmp_path):
    with pytest.raises(NotADirectoryError):
        make_dir_range(tmp_path / "missing", 0, 1, 1, 1)


def test_make_double_dirs(tmp_path):
    created = make_double_dirs(tmp_path, "p", 3)
    assert len(created) == 3
    for name in created:
        assert name.startswith("p")
        assert (tmp_path / name / name).is_dir()


def test_make_double_dirs_existing(tmp_path):
    make_double_dirs(tmp_path, "q", 1)
    with pytest.raises(FileExistsError):
        make_double_dirs(tmp_path, "q", 1)


def test_main_dirrange(tmp_path):
    assert main_dirrange([str(tmp_path), "0", "3", "1", "2"]) == 0
    assert len(list(tmp_path.iterdir())) == 3


def test_main_dirrange_usage(capsys):
    assert main_dirrange(["only"]) == 1
    assert "mkdirrange" in capsys.readouterr().err


def test_main_dirrange_missing(tmp_path, capsys):
    assert main_dirrange([str(tmp_path / "nope"), "0", "1", "1", "1"]) == 1
    assert "Can't mkdir" in capsys.readouterr().err


def test_main_doubledirs(tmp_path):
    assert main_doubledirs([str(tmp_path), "n", "2"]) == 0
    assert len(list(tmp_path.iterdir())) == 2


def test_main_doubledirs_usage(capsys):
    assert main_doubledirs([]) == 1
    assert "mkdoubledirs" in capsys.readouterr().err