#!/usr/bin/env python3
"""
Example: Basic usage of BugSense as a Python library
"""

from bugsense import FileMetric, analyze, sort_by_severity

# Metrics come from a collector: complexity from a parser, churn from git
metrics = [
    FileMetric("src/api/routes.py", cyclomatic_complexity=25, lines_of_code=600, churn=15),
    FileMetric("src/api/auth.py", cyclomatic_complexity=12, lines_of_code=200, churn=7),
    FileMetric("src/util.py", cyclomatic_complexity=2, lines_of_code=50, churn=1),
]

result = analyze(metrics)

for f in sorted(result.files, key=lambda f: f.risk_score, reverse=True):
    print(f"{f.risk_score:6.2f}  {f.path}")
print()

for insight in sort_by_severity(result.insights):
    print(f"[{insight.severity.value}] {insight.message} (confidence {insight.confidence:.0%})")

print(f"\nAverage risk {result.summary.avg_risk:.2f} across {result.summary.total_files} files")
