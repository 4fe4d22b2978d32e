from pathlib import Path

from PIL import Image

from ocr_batch.batch.aggregator import ResultAggregator
from ocr_batch.batch.queue import ItemQueue, ItemStatus
from ocr_batch.schema import ResultEntry


def test_add_then_clear_empties_queue():
    queue = ItemQueue()
    queue.add_items([b"a", b"b", b"c"])
    assert len(queue) == 3

    queue.clear()

    assert len(queue) == 0
    assert queue.items == ()


def test_items_are_queued_with_unique_identities():
    queue = ItemQueue()
    first = queue.add_items([b"x"] * 10)
    second = queue.add_items([b"y"] * 10)

    identities = {item.identity for item in queue}
    assert len(identities) == 20
    assert all(item.status is ItemStatus.QUEUED for item in queue)
    assert all(item.label == "Queued" for item in queue)
    assert list(queue) == first + second


def test_adding_leaves_existing_items_untouched():
    queue = ItemQueue()
    (existing,) = queue.add_items([b"x"], names=["first.png"])
    existing.status = ItemStatus.DONE

    queue.add_items([b"y"], names=["second.png"])

    assert queue.items[0] is existing
    assert existing.status is ItemStatus.DONE
    assert queue.get(existing.identity) is existing


def test_display_names(tmp_path: Path):
    image_path = tmp_path / "scan.png"
    queue = ItemQueue()
    items = queue.add_items([image_path, str(image_path), b"raw", b"named"], names=[None, None, None, "given.jpg"])

    assert [item.display_name for item in items] == ["scan.png", "scan.png", "image-3", "given.jpg"]


def test_labels_follow_status():
    queue = ItemQueue()
    (item,) = queue.add_items([b"x"])
    item.status = ItemStatus.RECOGNIZING
    item.progress = 42
    assert item.label == "Recognizing 42%"
    item.status = ItemStatus.NO_TEXT
    assert item.label == "No text"
    item.status = ItemStatus.ERROR
    assert item.label == "Error"


def test_clear_releases_thumbnails():
    queue = ItemQueue()
    (item,) = queue.add_items([Image.new("RGB", (640, 480), "white")])
    thumb = item.thumbnail()
    assert max(thumb.size) <= 128
    assert item.thumbnail() is thumb

    queue.clear()

    assert item._thumbnail is None


def test_clear_is_ignored_while_locked():
    queue = ItemQueue()
    queue.add_items([b"a", b"b"])
    queue.locked = True

    queue.clear()
    assert len(queue) == 2

    queue.locked = False
    queue.clear()
    assert len(queue) == 0


def test_aggregator_keeps_order_and_snapshots_are_immutable():
    aggregator = ResultAggregator()
    aggregator.append(ResultEntry(name="a", text="1"))
    aggregator.append(ResultEntry(name="b", text=""))

    snapshot = aggregator.snapshot()
    aggregator.append(ResultEntry(name="c", text="3"))

    assert [entry.name for entry in snapshot] == ["a", "b"]
    assert len(aggregator) == 3
    aggregator.reset()
    assert aggregator.snapshot() == ()
