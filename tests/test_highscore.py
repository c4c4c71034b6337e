import json

from facechase.storage.highscore import HighScoreBook, JsonFileStore, MemoryStore, parse_score


def test_parse_score():
    assert parse_score(None) == 0
    assert parse_score("42") == 42
    assert parse_score(" 7 ") == 7
    assert parse_score("abc") == 0
    assert parse_score("") == 0
    assert parse_score("-5") == 0


def test_book_reads_stored_best():
    assert HighScoreBook(MemoryStore({"face_hc": "12"})).best == 12
    assert HighScoreBook(MemoryStore()).best == 0
    assert HighScoreBook(MemoryStore({"face_hc": "junk"})).best == 0


def test_submit_only_writes_new_records():
    store = MemoryStore({"face_hc": "12"})
    book = HighScoreBook(store)

    assert not book.submit(12)
    assert not book.submit(9)
    assert store.writes == 0

    assert book.submit(15)
    assert book.best == 15
    assert store.get("face_hc") == "15"
    assert store.writes == 1


def test_custom_key():
    store = MemoryStore()
    HighScoreBook(store, key="other").submit(3)
    assert store.get("other") == "3"
    assert store.get("face_hc") is None


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("face_hc", "21")

    assert json.loads(path.read_text(encoding="utf-8")) == {"face_hc": "21"}
    assert JsonFileStore(path).get("face_hc") == "21"
    assert HighScoreBook(JsonFileStore(path)).best == 21


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonFileStore(path)
    assert store.get("face_hc") is None

    store.set("face_hc", "4")
    assert JsonFileStore(path).get("face_hc") == "4"


def test_json_store_ignores_non_object(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonFileStore(path).get("face_hc") is None
