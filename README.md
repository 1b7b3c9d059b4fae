# simpsons

A library for reading Claude Code session logs, which are the JSONL files under
`~/.claude/projects`. It turns them into session metadata, timelines, chat
histories, usage analytics, cost estimates and insights. It can also move
sessions between machines as zip bundles.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Reading a session

```python
from simpsons.jsonl import read_session_file
from simpsons.extract import extract_session_meta
from simpsons.detail import extract_session_detail

messages = read_session_file("session.jsonl")
meta = extract_session_meta(messages, "-Users-me-project", "session.jsonl")
print(meta.uuid, meta.slug, meta.message_count, meta.tokens_in, meta.cost_usd)

detail = extract_session_detail(messages, meta)
for event in detail.timeline:
    print(event.timestamp, event.type, event.tool_name, event.content)
for chat in detail.chat_messages:
    print(chat.role, chat.content)
```

- `read_session_file` skips lines that are not valid messages.
- It raises `OSError` when the file cannot be opened.
- It raises `ValueError` when a line is longer than 10 MiB.

Each line is parsed into a `simpsons.message.Message` by
`simpsons.message.parse_message`, which raises `MessageParseError` for bad
input. A message provides these methods:

- `model()`
- `usage()`
- `assistant_content()`
- `tool_use_blocks()`
- `user_content()`

`extract_session_meta` gathers the following into a `simpsons.models.SessionMeta`:

- the slug, the first prompt and the summaries
- the models used
- token and cache counts and the estimated cost
- tool, skill and file-operation counts
- the git branches
- links to pull requests
- turn durations

Sidechain messages are not counted.

`extract_session_detail` builds a `SessionDetail`. It holds a timeline, the file
activity and a chat history in which each tool call is summarised, such as
`Read → /work/login.go`. Timeline content is cut to 200 bytes by
`simpsons.detail.truncate`.

## Scanning a projects directory

```python
from simpsons.store import Store
from simpsons.scanner import Scanner, ScanMsgType

store = Store()
for msg in Scanner(store, "/home/me/.claude/projects").run():
    if msg.type is ScanMsgType.SESSIONS_BATCH:
        print(f"{msg.scanned}/{msg.total}")

analytics = store.analytics()
print(analytics.total_sessions, analytics.active_projects, analytics.cache_hit_rate())
print(store.today_spend())
```

`Scanner.run` is a generator. It yields these messages in order:

1. `PROJECTS_DISCOVERED`
2. `SESSIONS_BATCH`, once after every 50 sessions and once after the last
3. `SCAN_COMPLETE`

Subdirectories whose names start with a dot are ignored. Each session's
`subagent_count` is the number of `*.jsonl` files in
`<project>/<session-uuid>/subagents`.

`Store` is safe to use from several threads. It provides these methods:

- `add`, `get`, `all_sessions`
- `projects`, `sessions_by_project`
- `analytics`, which is cached until the next `add`
- `get_detail` and `set_detail`
- `set_scan_progress` and `scan_progress`
- `set_history_stats` and `history_stats`

## History and insights

```python
from simpsons.history_scanner import scan_history
from simpsons.history import compute_history_stats
from simpsons.insights import compute_insights

stats = compute_history_stats(scan_history("/home/me/.claude/history.jsonl"))
print(stats.total_prompts, stats.avg_prompt_words, stats.p95_prompt_words)
print([(w.word, w.count) for w in stats.top_words])

insights = compute_insights(store.all_sessions(), stats)
print(insights.current_streak, insights.longest_streak, insights.favorite_tool)
```

`compute_history_stats` counts the following:

- prompts per date and per hour
- a heatmap of weekday against hour, with Monday first
- the average and 95th-percentile prompt length in words
- the five most frequent words, which must have at least three letters and
  must not be stop words

`compute_insights` computes streaks, personal bests, weekly trends and totals.
When history statistics are given, they add to the active days and hours and
replace the question count and the word statistics.

## Costs

```python
from simpsons.cost import compute_cost, format_cost

usd = compute_cost("claude-opus-4-6", 1000, 500, 0, 20000)
print(format_cost(usd))  # "$0.08"
```

The model name is matched against a table of per-million-token prices. Unknown
models are charged at Sonnet rates. `format_cost` returns `-` for zero and
`<$0.01` for amounts below one cent.

## Export and import

```python
from simpsons.export import export_session, export_all
from simpsons.bundle import read_bundle, place_session

name = export_session("/home/me/.claude", meta, ".")
manifest, files = read_bundle(name)
place_session("/home/me/.claude", "-Users-me-other", manifest.session_uuid,
              files[manifest.session_uuid + ".jsonl"])
```

A bundle is a zip holding `manifest.json` and one or more session JSONL files.

- `export_session` writes `YYYY-MM-DDTHHMM-<slug>-<uuid8>.zip`.
- `export_all` writes `simpsons-export-YYYY-MM-DDTHHMM.zip`. It skips sessions
  it cannot read and fails if it can read none of them.
- `read_bundle` expands a leading `~` in the path and validates the manifest.

Errors raise `TransferError` or its subclass `ManifestError`, both from
`simpsons.manifest`. `Manifest` can be converted to and from dicts and JSON with
`to_dict`, `to_json`, `from_dict` and `from_json`.

## Clipboard

`simpsons.clipboard.copy(text)` writes text to the system clipboard. It runs
`pbcopy` on macOS, `xclip -selection clipboard` on Linux and `clip` on Windows.
It raises `ClipboardError` when the command fails or the platform is not
supported.

## What it does not do

This is a library only. It has no command-line program and no interactive
terminal browser: nothing here draws tabs, lists or detail screens, or handles
key presses. It keeps session data in memory only and stores nothing between
runs.

## Tests

```
pip install .[test]
pytest
```