from ffbuilder.utils import FlagList

def test_first_occurrence_wins():
    flags = FlagList(["--a", "--b"])
    assert flags.append("--c")
    assert not flags.append("--a")
    flags.extend(["--b", "--d"])
    assert flags.as_tuple() == ("--a", "--b", "--c", "--d")

def test_membership_and_length():
    flags = FlagList(["--a", "--a"])
    assert "--a" in flags
    assert "--b" not in flags
    assert len(flags) == 1
    assert list(flags) == ["--a"]
