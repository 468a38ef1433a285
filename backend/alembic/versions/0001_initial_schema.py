from alembic import op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("usuario", sa.String(100), nullable=False, index=True),
        sa.Column("nombre", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True, index=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("rol", sa.String(50), nullable=False, server_default="cliente"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("usuario", name="uq_usuarios_usuario"),
    )
    op.create_table(
        "sesiones_revocadas",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("sid", sa.String(64), nullable=False, index=True),
        sa.Column("usuario_id", sa.Integer(), nullable=True),
        sa.Column("revocado_en", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("expira_en", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.UniqueConstraint("sid", name="uq_sesiones_revocadas_sid"),
    )
    op.create_table(
        "categorias",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.UniqueConstraint("nombre", name="uq_categorias_nombre"),
    )
    op.create_table(
        "servicios",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=False),
        sa.Column("precio", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("descuento", sa.Numeric(5, 2), nullable=False, server_default="0"),
        sa.Column("imagen", sa.String(500), nullable=True),
        sa.Column("categoria_id", sa.Integer(), nullable=True, index=True),
        sa.ForeignKeyConstraint(["categoria_id"], ["categorias.id"], ondelete="SET NULL"),
    )
    op.create_table(
        "promociones",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("descuento_porcentaje", sa.Numeric(5, 2), nullable=False, server_default="0"),
        sa.Column("fecha_inicio", sa.Date(), nullable=False, index=True),
        sa.Column("fecha_fin", sa.Date(), nullable=False),
        sa.Column("imagen", sa.String(500), nullable=True),
    )
    op.create_table(
        "turnos",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("fecha_hora", sa.DateTime(), nullable=False, index=True),
        sa.Column("usuario_id", sa.Integer(), nullable=False, index=True),
        sa.Column("servicio_id", sa.Integer(), nullable=False, index=True),
        sa.ForeignKeyConstraint(["usuario_id"], ["usuarios.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["servicio_id"], ["servicios.id"], ondelete="CASCADE"),
    )
    op.create_table(
        "departamentos",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("numero", sa.String(20), nullable=False),
        sa.Column("capacidad", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("comodidades", sa.String(500), nullable=True),
        sa.Column("estado", sa.String(20), nullable=False, server_default="libre", index=True),
        sa.Column("tarifa_diaria", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.UniqueConstraint("numero", name="uq_departamentos_numero"),
    )
    op.create_table(
        "inquilinos",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("nombre_completo", sa.String(255), nullable=False),
        sa.Column("dni", sa.String(30), nullable=True, index=True),
        sa.Column("telefono", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("direccion_origen", sa.String(255), nullable=True),
        sa.Column("marca_vehiculo", sa.String(100), nullable=True),
        sa.Column("modelo_vehiculo", sa.String(100), nullable=True),
        sa.Column("patente_vehiculo", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "alquileres",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("departamento_id", sa.Integer(), nullable=False, index=True),
        sa.Column("inquilino_id", sa.Integer(), nullable=False, index=True),
        sa.Column("estado", sa.String(20), nullable=False, server_default="en curso", index=True),
        sa.Column("fecha_inicio", sa.Date(), nullable=False),
        sa.Column("fecha_fin", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(["departamento_id"], ["departamentos.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["inquilino_id"], ["inquilinos.id"], ondelete="CASCADE"),
    )
    op.create_table(
        "pagos",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("alquiler_id", sa.Integer(), nullable=False, index=True),
        sa.Column("monto", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("estado", sa.String(20), nullable=False, server_default="Pagado", index=True),
        sa.Column("fecha_pago", sa.Date(), nullable=True, index=True),
        sa.Column("forma_pago", sa.String(50), nullable=True),
        sa.ForeignKeyConstraint(["alquiler_id"], ["alquileres.id"], ondelete="CASCADE"),
    )
    op.create_table(
        "alumnos",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("apellido", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("curso", sa.String(100), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("alumnos")
    op.drop_table("pagos")
    op.drop_table("alquileres")
    op.drop_table("inquilinos")
    op.drop_table("departamentos")
    op.drop_table("turnos")
    op.drop_table("promociones")
    op.drop_table("servicios")
    op.drop_table("categorias")
    op.drop_table("sesiones_revocadas")
    op.drop_table("usuarios")
