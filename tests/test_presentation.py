from conftest import PNG_BYTES
from image_ingestion import ingest
from presentation import render_context, split_bullets
from service import RequestState, ScanSession


def test_split_newline_and_hyphen():
    assert split_bullets("Leaf spot detected\n- caused by fungus") == [
        "Leaf spot detected",
        "caused by fungus",
    ]


def test_split_single_line_is_one_item():
    assert split_bullets("   Healthy plant   ") == ["Healthy plant"]


def test_split_bullet_characters_and_blank_segments():
    text = "• Copper fungicide\n\n• Neem oil •  \n-\nRotate crops"
    assert split_bullets(text) == ["Copper fungicide", "Neem oil", "Rotate crops"]


def test_split_empty():
    assert split_bullets("") == []
    assert split_bullets(" \n - • ") == []


def test_context_without_image():
    context = render_context(ScanSession())

    assert context["preview_url"] is None
    assert context["scan_disabled"] is True
    assert context["show_results"] is False
    assert context["error"] is None


def test_context_with_results():
    image = ingest("image/png", PNG_BYTES)
    session = ScanSession(image=image, diagnosis="Rust\n- orange pustules", solutions="• Fungicide")

    context = render_context(session)

    assert context["preview_url"].startswith("data:image/png;base64,")
    assert context["scan_disabled"] is False
    assert context["show_results"] is True
    assert context["diagnosis_items"] == ["Rust", "orange pustules"]
    assert context["solution_items"] == ["Fungicide"]


def test_context_hides_results_while_in_flight():
    image = ingest("image/png", PNG_BYTES)
    session = ScanSession(image=image, diagnosis="Rust", state=RequestState.IN_FLIGHT)

    context = render_context(session)

    assert context["loading"] is True
    assert context["scan_disabled"] is True
    assert context["show_results"] is False
