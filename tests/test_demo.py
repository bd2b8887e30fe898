import pytest

from bridgeapi.demo import main, render_demo


@pytest.fixture
def lines():
    return render_demo().splitlines()


def test_demo_starts_with_title_and_ends_with_completion(lines):
    assert lines[0] == "🌉 Cross-Chain Bridge Demo"
    assert set(lines[1]) == {"="}
    assert len(lines[1]) == len("==========================")
    assert lines[-2] == "🎉 Demo completed successfully!"
    assert lines[-1] == "📖 For more information, see the documentation in docs/"


def test_render_is_deterministic_and_newline_terminated():
    first = render_demo()
    assert first == render_demo()
    assert first.endswith("\n")
    assert not first.endswith("\n\n")


def test_sections_appear_in_order(lines):
    titles = [
        "🔐 Threshold Signature Demo",
        "🌉 Bridge Operations Demo",
        "🌐 API Endpoints Demo",
        "🛡️ Security Features Demo",
    ]
    positions = [lines.index(title) for title in titles]
    assert positions == sorted(positions)
    for position in positions:
        assert lines[position - 1] == ""
        assert set(lines[position + 1]) == {"-"}


def test_threshold_section_lists_validators(lines):
    assert "    • Threshold: 2/3 validators required" in lines
    key_lines = [line for line in lines if line.endswith(": Generated key share")]
    assert key_lines == [f"    • Validator {i}: Generated key share" for i in range(3)]
    partial = [line for line in lines if line.endswith("created partial signature")]
    assert len(partial) == 2
    assert "    • Message: Transfer 1000 tokens from Ethereum to Polkadot" in lines


def test_endpoint_lines_are_aligned(lines):
    endpoint_lines = [line for line in lines if " - " in line and line.startswith("    • ")]
    names = ["GET /health", "GET /status", "GET /stats", "GET /transactions",
             "GET /validators", "GET /metrics", "WS /ws"]
    assert [line[6:].split(" - ")[0].rstrip() for line in endpoint_lines] == names
    assert len({line.index(" - ") for line in endpoint_lines}) == 1
    assert endpoint_lines[0].endswith("- Bridge health status")
    assert endpoint_lines[-1].endswith("- Real-time events")


def test_attack_lines_are_aligned(lines):
    start = lines.index("  🚫 Attack Prevention:")
    attack_lines = lines[start + 1:start + 6]
    statuses = [line.split("✅ ")[1] for line in attack_lines]
    assert statuses == ["Prevented", "Prevented", "Mitigated", "Detected", "Handled"]
    assert len({line.index("✅") for line in attack_lines}) == 1
    assert attack_lines[3].startswith("    • Validator Collusion")


def test_sample_status_response_block(lines):
    start = lines.index("  📋 Sample API Response (GET /status):")
    assert lines[start + 1] == "    {"
    assert lines[start + 2] == '      "status": "operational",'
    assert lines[start + 7] == "    }"


def test_main_prints_demo(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == render_demo()


def test_main_rejects_unknown_arguments(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2