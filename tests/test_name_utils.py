from protracker.modeling.name_utils import normalize_player_name, player_group_key


def test_normalize_player_name_folds_case_and_spacing():
    assert normalize_player_name("  LeBron   James ") == "lebron james"


def test_normalize_player_name_empty():
    assert normalize_player_name(None) == ""
    assert normalize_player_name("   ") == ""


def test_player_group_key_prefers_id():
    assert player_group_key("2544", "LeBron James") == "id:2544"
    assert player_group_key(None, "LeBron James") == "name:lebron james"
    assert player_group_key(None, "  ") is None
