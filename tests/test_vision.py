import pytest

from robogenius.vision import CLASS_NAMES, BoxInfo, MatInfo, box_label, box_to_image_rect, nms


def test_nms_removes_duplicate_keeps_best():
    low = BoxInfo(0, 0, 10, 10, 0.4, 0)
    high = BoxInfo(0, 0, 10, 10, 0.9, 0)
    kept = nms([low, high], 0.5)
    assert kept == [high]


def test_nms_keeps_disjoint_boxes_sorted():
    a = BoxInfo(0, 0, 10, 10, 0.3, 1)
    b = BoxInfo(100, 100, 110, 110, 0.8, 2)
    kept = nms([a, b], 0.5)
    assert kept == [b, a]


def test_nms_does_not_modify_input_and_is_subset():
    boxes = [BoxInfo(i, i, i + 20, i + 20, s, 0) for i, s in [(0, 0.1), (2, 0.7), (50, 0.5)]]
    original = list(boxes)
    kept = nms(boxes, 0.3)
    assert boxes == original
    assert all(k in boxes for k in kept)
    assert [k.score for k in kept] == sorted((k.score for k in kept), reverse=True)


def test_nms_empty():
    assert nms([], 0.5) == []


def test_box_label_apple():
    assert box_label(BoxInfo(score=0.5, label=0)) == "apple 50.0%"


def test_box_label_last_class():
    label = box_label(BoxInfo(score=1.0, label=len(CLASS_NAMES) - 1))
    assert label.startswith("lianwuguo ")


def test_box_label_unknown():
    with pytest.raises(ValueError):
        box_label(BoxInfo(label=len(CLASS_NAMES)))


def test_box_to_image_rect_identity():
    info = MatInfo(inp_size=320, max_side=320, pad_w=0, pad_h=0, ratio=1.0)
    box = BoxInfo(10, 20, 40, 60, 0.9, 0)
    assert box_to_image_rect(box, info) == (10, 20, 30, 40)


def test_box_to_image_rect_removes_padding():
    info = MatInfo(inp_size=320, max_side=640, pad_w=0, pad_h=40, ratio=0.5)
    box = BoxInfo(10, 40, 20, 50, 0.9, 0)
    x, y, w, h = box_to_image_rect(box, info)
    assert (x, y) == (20, 0)
    assert (w, h) == (20, 20)