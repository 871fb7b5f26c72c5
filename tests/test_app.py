from streamlit.testing.v1 import AppTest


def purchase_app():
    import app

    app.render_calculator("purchase")


def va_app():
    import app

    app.render_calculator("va_purchase")


def _results(at):
    return {r["label"]: r for r in at.session_state["results"]}


def test_purchase_page_renders_defaults():
    at = AppTest.from_function(purchase_app, default_timeout=30)
    at.run()
    assert not at.exception
    assert at.metric[0].label == "Total Monthly Payment"
    results = _results(at)
    assert sum(r["highlight"] for r in at.session_state["results"]) == 1
    assert results["Loan Amount"]["value"] == 350000


def test_purchase_page_parses_formatted_text():
    at = AppTest.from_function(purchase_app, default_timeout=30)
    at.run()
    at.text_input(key="purchase__home_price").set_value("$400,000")
    at.text_input(key="purchase__down_payment").set_value("80,000.00")
    at.run()
    results = _results(at)
    assert results["Loan Amount"]["value"] == 320000


def test_purchase_page_shows_validation_errors():
    at = AppTest.from_function(purchase_app, default_timeout=30)
    at.run()
    at.text_input(key="purchase__home_price").set_value("500")
    at.run()
    assert at.session_state["results"] == []
    assert any("Home Price" in e.value for e in at.error)


def test_insurance_toggle_converts_value():
    at = AppTest.from_function(purchase_app, default_timeout=30)
    at.run()
    at.radio(key="purchase__insurance_mode").set_value("percent")
    at.run()
    assert at.session_state["purchase__insurance_percent"] == f"{1200 / 350000 * 100:.4f}"
    results = _results(at)
    assert abs(results["Homeowners Insurance"]["value"] - 100) < 0.05


def test_va_page_shows_schedule():
    at = AppTest.from_function(va_app, default_timeout=30)
    at.run()
    assert not at.exception
    results = _results(at)
    assert "VA Funding Fee" in results
    assert any(c.value.startswith("Next payments") for c in at.caption)


def test_full_page_switches_calculator():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    assert not at.exception
    at.sidebar.selectbox[0].select("dscr")
    at.run()
    assert _results(at)["DSCR Ratio"]["highlight"]
