"""add_rls_policies

Revision ID: 8f3a61c5d2e7
Revises: 4c1d7e2a9b30
Create Date: 2026-03-02 09:41:10.552981

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8f3a61c5d2e7"
down_revision: str | Sequence[str] | None = "4c1d7e2a9b30"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add Row Level Security policies for profiles and complaints.

    The API connects with a service account that bypasses RLS and enforces
    roles in the service layer. These policies apply to direct Supabase
    client connections.
    """
    # --- Helper: caller's role without recursing through profiles RLS ---
    op.execute("""
        CREATE OR REPLACE FUNCTION get_user_role(uid UUID)
        RETURNS TEXT
        LANGUAGE sql
        SECURITY DEFINER
        STABLE
        SET search_path = public
        AS $$
            SELECT role FROM profiles WHERE user_id = uid;
        $$;
    """)

    for table in ["profiles", "complaints"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Profiles policies ---
    # SELECT: own profile, or any profile for staff (presence roster, reporter names)
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING (
                user_id = (SELECT auth.uid())
                OR get_user_role((SELECT auth.uid())) IN ('officer', 'worker')
            );
    """)
    # INSERT: a user creates only their own profile
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (
                user_id = (SELECT auth.uid())
            );
    """)
    # UPDATE: only their own row; the role column must not change
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (
                user_id = (SELECT auth.uid())
            )
            WITH CHECK (
                user_id = (SELECT auth.uid())
                AND role = get_user_role((SELECT auth.uid()))
            );
    """)

    # --- Complaints policies ---
    # SELECT: reporters see their own, staff see all
    op.execute("""
        CREATE POLICY complaints_select ON complaints
            FOR SELECT USING (
                user_id = (SELECT auth.uid())
                OR get_user_role((SELECT auth.uid())) IN ('officer', 'worker')
            );
    """)
    # INSERT: any authenticated user files complaints as themselves, always pending
    op.execute("""
        CREATE POLICY complaints_insert ON complaints
            FOR INSERT WITH CHECK (
                user_id = (SELECT auth.uid())
                AND status = 'pending'
            );
    """)
    # UPDATE: staff only
    op.execute("""
        CREATE POLICY complaints_update ON complaints
            FOR UPDATE USING (
                get_user_role((SELECT auth.uid())) IN ('officer', 'worker')
            );
    """)


def downgrade() -> None:
    """Drop all RLS policies and disable RLS."""
    policies = [
        ("complaints_update", "complaints"),
        ("complaints_insert", "complaints"),
        ("complaints_select", "complaints"),
        ("profiles_update", "profiles"),
        ("profiles_insert", "profiles"),
        ("profiles_select", "profiles"),
    ]
    for policy_name, table_name in policies:
        op.execute(f"DROP POLICY IF EXISTS {policy_name} ON {table_name};")

    for table in ["complaints", "profiles"]:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")

    op.execute("DROP FUNCTION IF EXISTS get_user_role(UUID);")
