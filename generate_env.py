#!/usr/bin/env python3
"""
Environment Configuration Generator for MedEquip

This script generates a .env file with:
- Cryptographically secure SECRET_KEY for Flask sessions
- A random password for the built-in admin account
- Database, timeout and logging configuration

Usage:
    python generate_env.py              # Interactive mode
    python generate_env.py --force      # Overwrite existing .env
    python generate_env.py --dev        # Development mode (predictable values, HTTP)
"""

import secrets
import string
import sys
import os
import shutil
from datetime import datetime
from pathlib import Path
import argparse


class EnvGenerator:
    """Generate environment configuration"""

    def __init__(self, dev_mode=False):
        self.dev_mode = dev_mode
        self.env_file = Path(__file__).parent / '.env'

    def generate_secret_key(self, length=64):
        if self.dev_mode:
            return "dev-secret-key-DO-NOT-USE-IN-PRODUCTION"
        return secrets.token_hex(length)

    def generate_password(self, length=16):
        """
        Generate a random admin password

        Args:
            length: Password length (default: 16)
        """
        if self.dev_mode:
            return "admin1234"

        # Safe characters for .env files (no #, =, quotes)
        alphabet = string.ascii_letters + string.digits + "!@$%^&*-_"
        return ''.join(secrets.choice(alphabet) for _ in range(length))

    def create_env_content(self):
        secret_key = self.generate_secret_key()
        admin_password = self.generate_password()
        secure = 'False' if self.dev_mode else 'True'

        content = f"""# MedEquip Environment Configuration
# Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
#
# SECURITY WARNING: Keep this file secret! Never commit to version control!

# ============================================================================
# Flask Configuration
# ============================================================================
SECRET_KEY={secret_key}
FLASK_DEBUG=False
USE_RELOADER=False
FLASK_HOST=127.0.0.1
FLASK_PORT=5000

# ============================================================================
# Local Store
# ============================================================================
# Leave unset to keep the SQLite file in instance/medequip.db
# DATABASE_URL=sqlite:////absolute/path/medequip.db
SEED_SAMPLE_DATA=True

# ============================================================================
# Built-in admin account (username: admin)
# ============================================================================
ADMIN_PASSWORD="{admin_password}"

# ============================================================================
# Remote storage and notifications
# ============================================================================
# The Google Apps Script URL and Telegram credentials are entered on the Settings page.
REMOTE_TIMEOUT_SECONDS=15
TELEGRAM_TIMEOUT_SECONDS=10

# Departments (besides Admin users) allowed to send the daily check summary, comma separated
DAILY_SUMMARY_DEPARTMENTS=เวชกรรมฟื้นฟู

# ============================================================================
# Security Settings
# ============================================================================
ENABLE_HTTPS={secure}
FORCE_HTTPS_REDIRECT={secure}
SESSION_COOKIE_SECURE={secure}
PERMANENT_SESSION_LIFETIME=3600

# ============================================================================
# Logging
# ============================================================================
LOG_DIR=logs
"""
        return content, {'secret_key': secret_key, 'admin_password': admin_password}

    def create_backup(self):
        if not self.env_file.exists():
            return None
        stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        backup_path = self.env_file.parent / f'.env.backup.{stamp}'
        shutil.copy2(self.env_file, backup_path)
        return backup_path

    def write_env_file(self, content):
        with open(self.env_file, 'w', encoding='utf-8') as f:
            f.write(content)

        # Owner read/write only
        os.chmod(self.env_file, 0o600)

    def generate(self, force=False):
        if self.env_file.exists() and not force:
            print(f"\n⚠️  File {self.env_file} already exists!")
            response = input("Do you want to overwrite it? (yes/no): ").lower().strip()
            if response not in ['yes', 'y']:
                print("❌ Aborted. Existing .env file was not modified.")
                return False

            backup_path = self.create_backup()
            if backup_path:
                print(f"✅ Backup created: {backup_path}")

        content, credentials = self.create_env_content()
        self.write_env_file(content)
        print(f"✅ Created: {self.env_file}")

        print("\n👤 Admin login:")
        print("   - Username: admin")
        print(f"   - Password: {credentials['admin_password']}")
        print("\n📋 Next step: python app.py")
        if self.dev_mode:
            print("\n⚠️  DEV MODE: predictable secret key and password, HTTPS disabled!")
        return True


def main():
    parser = argparse.ArgumentParser(description='Generate .env configuration for MedEquip')
    parser.add_argument('--force', '-f', action='store_true',
                        help='Overwrite existing .env file without prompting')
    parser.add_argument('--dev', '-d', action='store_true',
                        help='Development mode: predictable values (NOT FOR PRODUCTION!)')
    args = parser.parse_args()

    generator = EnvGenerator(dev_mode=args.dev)
    sys.exit(0 if generator.generate(force=args.force) else 1)


if __name__ == '__main__':
    main()
