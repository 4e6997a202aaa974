from analysis.insights import generate_insights
from models.structures import GapStatus, OkiOutcome


def test_empty_results():
    insights = generate_insights({})
    assert len(insights) == 1


def test_frame_trap_insight():
    insights = generate_insights({"advantage": {"valid": True, "status": GapStatus.FRAME_TRAP, "gap": 2}})
    assert any("Frame trap de 2F" in i for i in insights)


def test_serialized_status_values_are_understood():
    insights = generate_insights({"advantage": {"valid": True, "status": "no_combo", "gap": -3}})
    assert any("3F" in i for i in insights)


def test_invalid_advantage():
    insights = generate_insights({"advantage": {"valid": False, "error": "no valid frame data"}})
    assert any("no valid frame data" in i for i in insights)


def test_oki_insights():
    results = {
        "oki_timeline": {"classification": OkiOutcome.TOO_EARLY},
        "oki": [{"is_meaty": True, "move": {"name": "Stand MP"}}],
        "loop_throws": [],
    }
    insights = generate_insights(results)
    assert any("antes do oponente levantar" in i for i in insights)
    assert any("Stand MP" in i for i in insights)
    assert any("loop de throw" in i for i in insights)


def test_no_oki_options():
    insights = generate_insights({"oki": []})
    assert any("Nenhuma opção de oki" in i for i in insights)


def test_trade_insight():
    assert any("+3F" in i for i in generate_insights({"trade": {"advantage": 3}}))
