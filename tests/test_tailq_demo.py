import io

from sysbits.tailq_demo import main, run


def test_run_returns_removed_data_in_order():
    assert run(4, io.StringIO()) == [1, 2, 3, 4]


def test_run_output_lines():
    out = io.StringIO()
    run(2, out)
    assert out.getvalue().splitlines() == [
        "Creating TAILQ list...",
        "  Creating entry 1",
        "  Creating entry 2",
        "Linked list created. Iterating with foreach():",
        "  Entry 0 => data:1",
        "  Entry 1 => data:2",
        "Removing all entries, cleaning up...",
        "  Entry 0 => data:1",
        "  Entry 1 => data:2",
        "Done, exiting.",
    ]


def test_run_with_no_entries():
    out = io.StringIO()
    assert run(0, out) == []
    assert out.getvalue().splitlines()[-1] == "Done, exiting."


def test_main_default_creates_ten_entries(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "  Creating entry 10" in lines
    assert "  Creating entry 11" not in lines
    assert lines[-1] == "Done, exiting."


def test_main_rejects_bad_count(capsys):
    assert main(["many"]) == 1
    assert "many" in capsys.readouterr().err