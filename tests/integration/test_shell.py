"""
Integration tests for the interactive shell, driven through StringIO streams.

Covers:
    - Session start (banner, identity, reaper) and shutdown (farewell, reaper stopped)
    - Every command of the command table, including usage hints
    - Mapping of domain errors to one-line messages
    - Case-insensitive commands, unknown commands and EOF
"""

import io

from conftest import FakeClock
from main import create_app
from urlshortener.cli import BaseBrowserLauncher
from urlshortener.config import AppConfig
from urlshortener.domain import User
from urlshortener.errors import BrowserError
from urlshortener.manager import ShortCodeGenerator

URL = "https://example.com"


class RecordingBrowser(BaseBrowserLauncher):
    def __init__(self, fail=False):
        self.opened = []
        self.fail = fail

    def open(self, url):
        if self.fail:
            raise BrowserError("no display")
        self.opened.append(url)


def make_shell(lines, config=None, browser=None, clock=None):
    user = User.create()
    shell = create_app(
        config,
        browser=browser or RecordingBrowser(),
        stdin=io.StringIO("\n".join(lines) + "\n"),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        clock=clock or FakeClock(),
    )
    shell.user = user
    return shell


def run(lines, **kwargs):
    shell = make_shell(lines, **kwargs)
    shell.cmdloop()
    return shell, shell.stdout.getvalue(), shell.stderr.getvalue()


def code_for(shell, url=URL):
    return ShortCodeGenerator(shell.config.short_code_length).generate(url, shell.user.id)


def test_session_start_and_exit():
    shell, out, err = run(["exit"])
    assert "Type 'help'" in out
    assert out.count(f"Your user ID: {shell.user.id}") == 2
    assert "Goodbye!" in out
    assert err == ""
    assert shell.reaper.running is False


def test_fresh_identity_when_none_given():
    shell = create_app(stdin=io.StringIO("exit\n"), stdout=io.StringIO(), stderr=io.StringIO(),
                       browser=RecordingBrowser())
    shell.cmdloop()
    assert shell.user is not None
    assert shell.users.user_exists(shell.user.id)


def test_eof_ends_session():
    shell = make_shell([])
    shell.stdin = io.StringIO("")
    shell.cmdloop()
    assert "Goodbye!" in shell.stdout.getvalue()


def test_help_lists_commands():
    _, out, _ = run(["help", "exit"])
    for name in ("create", "use", "list", "info", "delete", "help", "exit"):
        assert f"  {name}" in out


def test_unknown_command_hint():
    _, out, _ = run(["frobnicate now", "exit"])
    assert "Unknown command: frobnicate" in out


def test_create_prints_short_url():
    shell = make_shell([f"create {URL} 5", "exit"])
    shell.cmdloop()
    out = shell.stdout.getvalue()
    assert f"Short URL: clck.ru/{code_for(shell)}" in out
    assert f"Original URL: {URL}" in out
    assert "Click limit: 5" in out
    assert "Expires: 2026-01-02 12:00:00" in out


def test_commands_are_case_insensitive():
    shell = make_shell([f"CREATE {URL}", "exit"])
    shell.cmdloop()
    assert "Click limit: 10" in shell.stdout.getvalue()


def test_create_argument_errors():
    _, out, err = run(["create", f"create {URL} many", f"create {URL} 0", "create ftp://example.com", "exit"])
    assert "Usage: create <URL> [click_limit]" in out
    assert "Invalid click limit: many" in err
    assert "Click limit must be positive" in err
    assert "Error: URL must start with http:// or https://" in err


def test_use_opens_browser_and_consumes_clicks():
    browser = RecordingBrowser()
    shell = make_shell([], browser=browser)
    code = code_for(shell)
    shell.stdin = io.StringIO(f"create {URL} 1\nuse {code}\nuse {code}\nexit\n")
    shell.cmdloop()
    out, err = shell.stdout.getvalue(), shell.stderr.getvalue()
    assert f"Redirecting to: {URL}" in out
    assert browser.opened == [URL]
    assert "Link unavailable" in err
    # limit-reached notice rendered by the console notifier
    assert "click limit reached" in out


def test_use_unknown_code_and_usage():
    _, out, err = run(["use", "use zzzzzz", "exit"])
    assert "Usage: use <code>" in out
    assert "Link not found: zzzzzz" in err


def test_use_reports_browser_failure_after_consuming():
    shell = make_shell([], browser=RecordingBrowser(fail=True))
    code = code_for(shell)
    shell.stdin = io.StringIO(f"create {URL} 2\nuse {code}\nexit\n")
    shell.cmdloop()
    assert "Could not open browser: no display" in shell.stderr.getvalue()
    assert shell.links.info(code).click_count == 1


def test_use_expired_link():
    clock = FakeClock()
    shell = make_shell([], clock=clock)
    code = code_for(shell)
    shell.onecmd(shell.precmd(f"create {URL}"))
    clock.advance(hours=48)
    shell.onecmd(shell.precmd(f"use {code}"))
    assert "Link unavailable: Link %s has expired" % code in shell.stderr.getvalue()
    assert "link expired" in shell.stdout.getvalue()


def test_use_inactive_link_notifies_unavailable():
    shell = make_shell([])
    code = code_for(shell)
    shell.onecmd(f"create {URL}")
    shell.links.store.find_by_code(code).active = False
    shell.onecmd(f"use {code}")
    assert "link unavailable" in shell.stdout.getvalue()
    assert f"Link unavailable: Link {code} is inactive" in shell.stderr.getvalue()


def test_list_empty_and_populated():
    _, out, _ = run(["list", "create https://a.com", "create https://b.com 3", "list", "exit"])
    assert "You have no links yet." in out
    assert "Original URL: https://a.com" in out
    assert "Clicks: 0/3 (Active)" in out
    assert "Total: 2 link(s)" in out


def test_info_with_notifications_enabled():
    shell = make_shell([])
    code = code_for(shell)
    shell.stdin = io.StringIO(f"create {URL}\ninfo {code}\ninfo\ninfo nope00\nexit\n")
    shell.cmdloop()
    out, err = shell.stdout.getvalue(), shell.stderr.getvalue()
    assert "Link information" in out
    assert f"Owner ID: {shell.user.id}" in out
    assert "Usage: info <code>" in out
    assert "Error: Link not found: nope00" in err


def test_info_with_notifications_disabled_still_prints():
    shell = make_shell([], config=AppConfig(notifications_enabled=False, short_domain="sho.rt"))
    code = code_for(shell)
    shell.stdin = io.StringIO(f"create {URL}\ninfo {code}\nexit\n")
    shell.cmdloop()
    assert f"Short URL: sho.rt/{code}" in shell.stdout.getvalue()


def test_delete_flow():
    shell = make_shell([])
    code = code_for(shell)
    shell.stdin = io.StringIO(f"create {URL}\ndelete {code}\ndelete {code}\ndelete\nexit\n")
    shell.cmdloop()
    out, err = shell.stdout.getvalue(), shell.stderr.getvalue()
    assert f"OK Link deleted: {code}" in out
    assert f"Error: Link not found: {code}" in err
    assert "Usage: delete <code>" in out


def test_delete_someone_elses_link_is_forbidden():
    shell = make_shell([])
    other = User.create()
    link = shell.links.create(URL, other.id)
    shell.onecmd(f"delete {link.short_code}")
    assert "not allowed to delete" in shell.stderr.getvalue()
    assert shell.links.info(link.short_code).owner_id == other.id


def test_delete_with_notifications_disabled():
    shell = make_shell([], config=AppConfig(notifications_enabled=False))
    code = code_for(shell)
    shell.onecmd(f"create {URL}")
    shell.onecmd(f"delete {code}")
    assert f"OK Link deleted: {code}" in shell.stdout.getvalue()
