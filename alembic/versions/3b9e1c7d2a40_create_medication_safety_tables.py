"""Create medication safety tables

Revision ID: 3b9e1c7d2a40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b9e1c7d2a40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum labels are the member names, as SQLAlchemy stores them
medication_frequency = sa.Enum(
    'ONCE_DAILY', 'TWICE_DAILY', 'THREE_TIMES_DAILY', 'FOUR_TIMES_DAILY',
    'EVERY_6_HOURS', 'EVERY_8_HOURS', 'EVERY_12_HOURS', 'WEEKLY', 'TWICE_WEEKLY',
    'MONTHLY', 'AS_NEEDED', 'CUSTOM',
    name='medicationfrequency',
)
medication_route = sa.Enum(
    'ORAL', 'SUBLINGUAL', 'INJECTION_IM', 'INJECTION_IV', 'INJECTION_SC', 'TOPICAL',
    'INHALATION', 'RECTAL', 'NASAL', 'EYE_DROPS', 'EAR_DROPS', 'PATCH',
    name='medicationroute',
)
medication_category = sa.Enum(
    'PAIN_RELIEF', 'ANTIBIOTICS', 'HEART_MEDICATION', 'BLOOD_PRESSURE', 'DIABETES',
    'MENTAL_HEALTH', 'VITAMINS', 'SUPPLEMENTS', 'RESPIRATORY', 'GASTROINTESTINAL',
    'HORMONAL', 'OTHER',
    name='medicationcategory',
)
medication_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'CRITICAL', name='medicationpriority')
interaction_type = sa.Enum('MINOR', 'MODERATE', 'MAJOR', 'CONTRAINDICATED', name='interactiontype')
administration_status = sa.Enum(
    'PENDING', 'ADMINISTERED', 'PARTIAL', 'MISSED', 'REFUSED', 'DELAYED', 'CANCELLED',
    name='administrationstatus',
)
patient_response = sa.Enum('GOOD', 'FAIR', 'POOR', 'ADVERSE', name='patientresponse')
alert_type = sa.Enum('INTERACTION', 'MISSED_DOSE', 'SIDE_EFFECT', 'DISCONTINUATION', 'OTHER', name='alerttype')
alert_severity = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'CRITICAL', name='alertseverity')

ENUMS = (
    medication_frequency, medication_route, medication_category, medication_priority,
    interaction_type, administration_status, patient_response, alert_type, alert_severity,
)


def upgrade() -> None:
    op.create_table(
        'medications',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('patient_id', sa.String(), nullable=False),
        sa.Column('prescribed_by', sa.String(), nullable=False),
        sa.Column('medication_name', sa.String(), nullable=False),
        sa.Column('generic_name', sa.String(), nullable=True),
        sa.Column('dosage', sa.String(), nullable=False),
        sa.Column('frequency', medication_frequency, nullable=False),
        sa.Column('route', medication_route, nullable=False),
        sa.Column('category', medication_category, nullable=False),
        sa.Column('priority', medication_priority, nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_prn', sa.Boolean(), nullable=False),
        sa.Column('prn_condition', sa.String(), nullable=True),
        sa.Column('max_daily_doses', sa.Integer(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_modified_by', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_medications_patient_id'), 'medications', ['patient_id'], unique=False)
    op.create_index(op.f('ix_medications_is_active'), 'medications', ['is_active'], unique=False)

    op.create_table(
        'medication_schedules',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('medication_id', sa.String(length=36), nullable=False),
        sa.Column('patient_id', sa.String(), nullable=False),
        sa.Column('scheduled_times', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_medication_schedules_medication_id'), 'medication_schedules', ['medication_id'], unique=False)
    op.create_index(op.f('ix_medication_schedules_patient_id'), 'medication_schedules', ['patient_id'], unique=False)

    op.create_table(
        'medication_interactions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('medication_1', sa.String(), nullable=False),
        sa.Column('medication_2', sa.String(), nullable=False),
        sa.Column('interaction_type', interaction_type, nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('recommendation', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_medication_interactions_medication_1'), 'medication_interactions', ['medication_1'], unique=False)
    op.create_index(op.f('ix_medication_interactions_medication_2'), 'medication_interactions', ['medication_2'], unique=False)

    op.create_table(
        'medication_administrations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('medication_id', sa.String(length=36), nullable=False),
        sa.Column('patient_id', sa.String(), nullable=False),
        sa.Column('administered_by', sa.String(), nullable=True),
        sa.Column('scheduled_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('administered_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', administration_status, nullable=False),
        sa.Column('dosage_given', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('side_effects_observed', sa.JSON(), nullable=False),
        sa.Column('patient_response', patient_response, nullable=True),
        sa.Column('witnessed_by', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_medication_administrations_medication_id'), 'medication_administrations', ['medication_id'], unique=False)
    op.create_index(op.f('ix_medication_administrations_patient_id'), 'medication_administrations', ['patient_id'], unique=False)
    op.create_index(op.f('ix_medication_administrations_scheduled_time'), 'medication_administrations', ['scheduled_time'], unique=False)

    op.create_table(
        'medication_alerts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('patient_id', sa.String(), nullable=False),
        sa.Column('medication_id', sa.String(length=36), nullable=True),
        sa.Column('alert_type', alert_type, nullable=False),
        sa.Column('severity', alert_severity, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('action_required', sa.Text(), nullable=True),
        sa.Column('is_acknowledged', sa.Boolean(), nullable=False),
        sa.Column('acknowledged_by', sa.String(), nullable=True),
        sa.Column('acknowledged_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_medication_alerts_patient_id'), 'medication_alerts', ['patient_id'], unique=False)
    op.create_index(op.f('ix_medication_alerts_medication_id'), 'medication_alerts', ['medication_id'], unique=False)
    op.create_index(op.f('ix_medication_alerts_created_at'), 'medication_alerts', ['created_at'], unique=False)

    op.create_table(
        'patient_symptom_reports',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('patient_id', sa.String(), nullable=False),
        sa.Column('medication_id', sa.String(length=36), nullable=True),
        sa.Column('symptoms', sa.JSON(), nullable=False),
        sa.Column('severity', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reported_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('follow_up_required', sa.Boolean(), nullable=False),
        sa.Column('reviewed_by', sa.String(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('action_taken', sa.Text(), nullable=True),
        sa.Column('follow_up_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_resolved', sa.Boolean(), nullable=False),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_patient_symptom_reports_patient_id'), 'patient_symptom_reports', ['patient_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_patient_symptom_reports_patient_id'), table_name='patient_symptom_reports')
    op.drop_table('patient_symptom_reports')

    op.drop_index(op.f('ix_medication_alerts_created_at'), table_name='medication_alerts')
    op.drop_index(op.f('ix_medication_alerts_medication_id'), table_name='medication_alerts')
    op.drop_index(op.f('ix_medication_alerts_patient_id'), table_name='medication_alerts')
    op.drop_table('medication_alerts')

    op.drop_index(op.f('ix_medication_administrations_scheduled_time'), table_name='medication_administrations')
    op.drop_index(op.f('ix_medication_administrations_patient_id'), table_name='medication_administrations')
    op.drop_index(op.f('ix_medication_administrations_medication_id'), table_name='medication_administrations')
    op.drop_table('medication_administrations')

    op.drop_index(op.f('ix_medication_interactions_medication_2'), table_name='medication_interactions')
    op.drop_index(op.f('ix_medication_interactions_medication_1'), table_name='medication_interactions')
    op.drop_table('medication_interactions')

    op.drop_index(op.f('ix_medication_schedules_patient_id'), table_name='medication_schedules')
    op.drop_index(op.f('ix_medication_schedules_medication_id'), table_name='medication_schedules')
    op.drop_table('medication_schedules')

    op.drop_index(op.f('ix_medications_is_active'), table_name='medications')
    op.drop_index(op.f('ix_medications_patient_id'), table_name='medications')
    op.drop_table('medications')

    # Drop enum types left behind on PostgreSQL
    for enum_type in ENUMS:
        enum_type.drop(op.get_bind(), checkfirst=True)
