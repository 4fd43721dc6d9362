"""Grant the admin role to an existing account.

Usage: python scripts/make_admin.py someone@example.com
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flower_admin import create_app  # noqa: E402
from flower_admin.auth.provider import grant_role  # noqa: E402
from flower_admin.models import User  # noqa: E402


def main(argv):
    if len(argv) != 2:
        print(__doc__)
        return 2

    app = create_app()
    with app.app_context():
        user = User.query.filter_by(email=argv[1].strip().lower()).first()
        if user is None:
            print(f"No account for {argv[1]}; sign up at /admin/login first")
            return 1
        if grant_role(user, 'admin'):
            print("Admin role granted")
        else:
            print("User is already an admin")
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
