import json
import csv
import os

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
RESULTS = os.path.join(ROOT, "output", "results.json")
OUT_CSV = os.path.join(ROOT, "output", "oki_report.csv")
OUT_JSON = os.path.join(ROOT, "output", "oki_report.json")

FIELDNAMES = ["type", "setup", "move", "input", "delay", "start_frame", "end_frame", "active_frame_hit", "meaty", "key"]


def build_rows(res):
    """Converte as listas `oki` e `loop_throws` de results.json em linhas planas."""

    rows = []
    for m in res.get("oki", []):
        move = m.get("move") or {}
        rows.append({
            "type": "oki",
            "setup": m.get("prefix_name") or "-",
            "move": move.get("name"),
            "input": move.get("input"),
            "delay": m.get("delay"),
            "start_frame": m.get("our_start"),
            "end_frame": m.get("our_end"),
            "active_frame_hit": m.get("active_frame_hit"),
            "meaty": bool(m.get("is_meaty")),
            "key": m.get("key"),
        })

    for lt in res.get("loop_throws", []):
        filler = lt.get("filler") or {}
        rows.append({
            "type": "loop_throw",
            "setup": " + ".join(lt.get("actions") or []) or "-",
            "move": filler.get("name"),
            "input": filler.get("input"),
            "delay": lt.get("delay"),
            "start_frame": lt.get("throw_start"),
            "end_frame": lt.get("throw_end"),
            "active_frame_hit": None,
            "meaty": False,
            "key": lt.get("key"),
        })
    return rows


def main():
    """
    Exporta as opções de oki e loop throw em CSV e JSON.

    - Lê `output/results.json` (gerado por `main.py`).
    - Gera `output/oki_report.csv` e `output/oki_report.json`.
    """

    if not os.path.exists(RESULTS):
        print("No results.json found at", RESULTS)
        return

    with open(RESULTS, "r", encoding="utf-8") as f:
        res = json.load(f)

    rows = build_rows(res)

    # write CSV
    with open(OUT_CSV, "w", newline='', encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=FIELDNAMES)
        writer.writeheader()
        for r in rows:
            writer.writerow(r)

    # write JSON
    counts = {
        "oki": len([r for r in rows if r["type"] == "oki"]),
        "meaty": len([r for r in rows if r["meaty"]]),
        "loop_throws": len([r for r in rows if r["type"] == "loop_throw"]),
    }
    with open(OUT_JSON, "w", encoding="utf-8") as jf:
        json.dump({"counts": counts, "rows": rows}, jf, indent=2, ensure_ascii=False)

    print("Exported oki report:", OUT_CSV, OUT_JSON)


if __name__ == '__main__':
    main()
