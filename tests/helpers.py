HEADER = ["Credit_Score", "Income", "Loan_Amount(s)", "Loan_Approved"]

SCENARIO_ROWS = [
    ["700", "50000", "10000", "Yes"],
    ["400", "20000", "30000", "No"],
    ["750", "60000", "5000", "Yes"],
    ["380", "18000", "28000", "No"],
]


def write_csv(path, rows, header=HEADER):
    lines = [",".join(header)] + [",".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def as_dicts(rows, header=HEADER):
    return [dict(zip(header, row)) for row in rows]
