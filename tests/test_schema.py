from jobboard.schema import PROFILE_SCHEMA_VERSION, migrate_profile, split_list


def test_id_used_as_user_key_becomes_user_id():
    migrated = migrate_profile({"id": 7, "first_name": "Ada"})

    assert migrated["user_id"] == 7
    assert "id" not in migrated


def test_surrogate_id_is_dropped_when_user_id_present():
    migrated = migrate_profile({"id": 3, "user_id": 7})

    assert migrated["user_id"] == 7
    assert "id" not in migrated


def test_single_name_is_split():
    migrated = migrate_profile({"user_id": 1, "full_name": "Ada King Lovelace"})

    assert migrated["first_name"] == "Ada"
    assert migrated["last_name"] == "King Lovelace"


def test_existing_names_win_over_legacy_name():
    migrated = migrate_profile({"user_id": 1, "name": "Someone Else", "first_name": "Ada"})

    assert migrated["first_name"] == "Ada"
    assert "last_name" not in migrated


def test_comma_separated_lists():
    migrated = migrate_profile({"user_id": 1, "skills": "python, sql,, ", "languages": ["Spanish", " "]})

    assert migrated["skills"] == ["python", "sql"]
    assert migrated["languages"] == ["Spanish"]


def test_social_handles_become_urls():
    migrated = migrate_profile({"user_id": 1, "instagram_profile": "@ada", "tiktok_profile": "ada"})

    assert migrated["instagram_url"] == "https://instagram.com/ada"
    assert migrated["tiktok_url"] == "https://tiktok.com/@ada"


def test_legacy_roles_and_unknown_keys():
    migrated = migrate_profile({"user_id": 1, "role": "cliente", "age": 30, "gender": "x"})

    assert migrated == {"user_id": 1, "role": "client", "schema_version": PROFILE_SCHEMA_VERSION}
    assert migrate_profile({"user_id": 1, "role": "user"})["role"] == "candidate"


def test_split_list():
    assert split_list(None) == []
    assert split_list("a, b") == ["a", "b"]
