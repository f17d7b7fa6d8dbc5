#!/usr/bin/env python3
"""Generate a sample reference price file and sample accounts.

Writes, under the output directory:
- DADOS_HISTORICOS.txt: fixed-width daily average prices for B3 tickers
- accounts.json: generated accounts with their wallets (passwords included,
  for manual login tests only)
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from invest_ledger.generators import AccountGenerator, ReferenceDataGenerator, WalletGenerator


def generate_reference_file(output_dir: Path, start: date, days: int, seed: int) -> Path:
    """Write the historical price file."""
    print("\n1. Generating reference prices...")
    path = output_dir / "DADOS_HISTORICOS.txt"
    count = ReferenceDataGenerator(seed=seed).write(path, start, days)
    print(f"Saved {count} records to {path}")
    return path


def generate_accounts(output_dir: Path, num_accounts: int, wallets_per_account: int, seed: int) -> list[dict]:
    """Write sample accounts and wallets as JSON."""
    print("\n2. Generating accounts...")
    account_gen = AccountGenerator(seed=seed)
    wallet_gen = WalletGenerator(seed=seed)

    data = []
    for account in account_gen.generate_batch(num_accounts):
        wallets = wallet_gen.generate_for_account(account, wallets_per_account)
        data.append(
            {
                "cpf": account.cpf.value,
                "name": account.name.value,
                "password": account.password.value,
                "wallets": [
                    {"code": w.code.value, "name": w.name.value, "profile": w.profile.value}
                    for w in wallets
                ],
            }
        )

    path = output_dir / "accounts.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    print(f"Saved {len(data)} accounts to {path}")
    return data


def main() -> None:
    """Generate all sample data files."""
    parser = argparse.ArgumentParser(description="Generate sample ledger data")
    parser.add_argument("--output-dir", type=Path, default=project_root / "data", help="Output directory")
    parser.add_argument("--accounts", type=int, default=5, help="Number of accounts")
    parser.add_argument("--wallets", type=int, default=2, help="Wallets per account (max 5)")
    parser.add_argument("--days", type=int, default=60, help="Business days of reference prices")
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=date(2024, 1, 2),
        help="First day of reference prices (YYYY-MM-DD)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    if not 0 <= args.wallets <= 5:
        parser.error("--wallets must be between 0 and 5")

    args.output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("Generating Sample Ledger Data")
    print("=" * 60)

    generate_reference_file(args.output_dir, args.start, args.days, args.seed)
    generate_accounts(args.output_dir, args.accounts, args.wallets, args.seed)

    print(f"\nAll files saved to: {args.output_dir}")
    print("=" * 60)


if __name__ == "__main__":
    main()
