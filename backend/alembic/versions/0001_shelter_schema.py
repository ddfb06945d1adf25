"""Create caretaker, animal and medication tables plus the legacy source tables."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=240), nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "SUSPENDED", name="userstatus"),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "animals",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("sex", sa.Enum("Macho", "Femea", name="animalsex"), nullable=False),
        sa.Column("coat", sa.String(length=120), nullable=False),
        sa.Column("age", sa.String(length=60), nullable=False),
        sa.Column("owner_name", sa.String(length=240), nullable=False),
        sa.Column("treatment_for", sa.String(length=1024), nullable=False),
        sa.Column("treatment", sa.String(length=1024), nullable=False),
        sa.Column("fiv", sa.Boolean(), nullable=True),
        sa.Column("felv", sa.Boolean(), nullable=True),
        sa.Column("rabies", sa.Boolean(), nullable=True),
        sa.Column("v6", sa.Boolean(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column(
            "created_by", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False
        ),
        *_timestamps(),
    )
    op.create_index("ix_animals_created_by", "animals", ["created_by"])

    op.create_table(
        "medication_records",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "animal_id", sa.Uuid(as_uuid=True), sa.ForeignKey("animals.id"), nullable=False
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("time", sa.String(length=5), nullable=False),
        sa.Column("medication", sa.String(length=255), nullable=False),
        sa.Column("dose", sa.String(length=120), nullable=False),
        sa.Column("administered", sa.Boolean(), nullable=False),
        sa.Column("observations", sa.String(length=2048), nullable=True),
        sa.Column(
            "administered_by",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id"),
            nullable=True,
        ),
        sa.Column("group_id", sa.String(length=64), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_medication_records_animal_date", "medication_records", ["animal_id", "date"]
    )
    op.create_index("ix_medication_records_date", "medication_records", ["date"])
    op.create_index("ix_medication_records_group_id", "medication_records", ["group_id"])

    op.create_table(
        "legacy_animals",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("nome", sa.String(length=120), nullable=False),
        sa.Column("sexo", sa.String(length=16), nullable=False),
        sa.Column("pelagem", sa.String(length=120), nullable=False),
        sa.Column("idade", sa.String(length=60), nullable=False),
        sa.Column("nome_tutor", sa.String(length=240), nullable=False),
        sa.Column("tratamento_para", sa.String(length=1024), nullable=False),
        sa.Column("tratamento", sa.String(length=1024), nullable=False),
        sa.Column("fiv", sa.Boolean(), nullable=True),
        sa.Column("felv", sa.Boolean(), nullable=True),
        sa.Column("raiva", sa.Boolean(), nullable=True),
        sa.Column("v6", sa.Boolean(), nullable=True),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        sa.Column(
            "created_by", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id"), nullable=False
        ),
        *_timestamps(),
    )
    op.create_index("ix_legacy_animals_created_by", "legacy_animals", ["created_by"])

    op.create_table(
        "legacy_medication_records",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("animal_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("data", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("horario", sa.String(length=5), nullable=False),
        sa.Column("medicamento", sa.String(length=255), nullable=False),
        sa.Column("dose", sa.String(length=120), nullable=False),
        sa.Column("administrado", sa.Boolean(), nullable=False),
        sa.Column("observacoes", sa.String(length=2048), nullable=True),
        sa.Column(
            "administrado_por",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index(
        "ix_legacy_medication_records_animal_data",
        "legacy_medication_records",
        ["animal_id", "data"],
    )


def downgrade() -> None:
    op.drop_table("legacy_medication_records")
    op.drop_table("legacy_animals")
    op.drop_table("medication_records")
    op.drop_table("animals")
    op.drop_table("users")
    sa.Enum(name="animalsex").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="userstatus").drop(op.get_bind(), checkfirst=True)
