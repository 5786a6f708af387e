"""
Command Line Interface Package

CLI for running trend analyses over transaction exports.

Command Structure:
- financeflow: Main entry point with utility commands (version, config)
- financeflow trends analyze: Full trend report (trends, risk, insights,
  anomalies, seasonality, forecasts), optionally written to JSON
- financeflow trends forecast: Forecast a single expense or income series
"""
