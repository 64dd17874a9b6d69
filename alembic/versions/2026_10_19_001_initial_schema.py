"""Initial schema: tenants, staff, menu, tables, orders, invoices

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

subscription_plan = sa.Enum('FREE', 'STARTER', 'PROFESSIONAL', 'ENTERPRISE', name='subscriptionplan')
staff_role = sa.Enum('OWNER', 'MANAGER', 'CHEF', 'WAITER', name='staffrole')
platform_role = sa.Enum('ADMIN', 'SUPER_ADMIN', name='platformrole')
order_status = sa.Enum(
    'PENDING', 'CONFIRMED', 'PREPARING', 'READY', 'SERVED', 'COMPLETED', 'CANCELLED',
    name='orderstatus',
)
payment_status = sa.Enum('PENDING', 'PAID', 'FAILED', 'REFUNDED', name='paymentstatus')
waiter_call_status = sa.Enum('PENDING', 'ATTENDED', 'COMPLETED', name='waitercallstatus')


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.String(2000), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('currency', sa.String(10), nullable=False),
        sa.Column('currency_symbol', sa.String(10), nullable=False),
        sa.Column('tax_enabled', sa.Boolean(), nullable=False),
        sa.Column('tax_inclusive', sa.Boolean(), nullable=False),
        sa.Column('subscription_plan', subscription_plan, nullable=False),
        sa.Column('subscription_end', sa.DateTime(), nullable=True),
        sa.Column('onboarded_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_tenants_name', 'tenants', ['name'])
    op.create_index('ix_tenants_slug', 'tenants', ['slug'], unique=True)
    op.create_index('ix_tenants_email', 'tenants', ['email'])
    op.create_index('ix_tenants_is_active', 'tenants', ['is_active'])
    op.create_index('ix_tenants_is_verified', 'tenants', ['is_verified'])
    op.create_index('ix_tenants_created_at', 'tenants', ['created_at'])

    op.create_table(
        'brand_settings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('logo_url', sa.String(1000), nullable=True),
        sa.Column('favicon_url', sa.String(1000), nullable=True),
        sa.Column('cover_image_url', sa.String(1000), nullable=True),
        sa.Column('primary_color', sa.String(20), nullable=False),
        sa.Column('secondary_color', sa.String(20), nullable=False),
        sa.Column('accent_color', sa.String(20), nullable=False),
        sa.Column('background_color', sa.String(20), nullable=False),
        sa.Column('text_color', sa.String(20), nullable=False),
        sa.Column('heading_font', sa.String(100), nullable=False),
        sa.Column('body_font', sa.String(100), nullable=False),
        sa.Column('welcome_message', sa.String(500), nullable=True),
        sa.Column('tagline', sa.String(255), nullable=True),
        sa.Column('gallery_images', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_brand_settings_tenant_id', 'brand_settings', ['tenant_id'], unique=True)

    op.create_table(
        'tax_settings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_tax_settings_tenant_id', 'tax_settings', ['tenant_id'])

    op.create_table(
        'staff',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('role', staff_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_staff_tenant_id', 'staff', ['tenant_id'])
    op.create_index('ix_staff_email', 'staff', ['email'], unique=True)
    op.create_index('ix_staff_role', 'staff', ['role'])
    op.create_index('ix_staff_is_active', 'staff', ['is_active'])

    op.create_table(
        'platform_admins',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', platform_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_platform_admins_email', 'platform_admins', ['email'], unique=True)
    op.create_index('ix_platform_admins_is_active', 'platform_admins', ['is_active'])

    op.create_table(
        'menu_categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.String(1000), nullable=True),
        sa.Column('image', sa.String(1000), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_menu_categories_tenant_id', 'menu_categories', ['tenant_id'])
    op.create_index('ix_menu_categories_sort_order', 'menu_categories', ['sort_order'])
    op.create_index('ix_menu_categories_is_active', 'menu_categories', ['is_active'])

    op.create_table(
        'menu_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('category_id', sa.Uuid(), sa.ForeignKey('menu_categories.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.String(2000), nullable=True),
        sa.Column('image', sa.String(1000), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_veg', sa.Boolean(), nullable=False),
        sa.Column('preparation_time', sa.Integer(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_menu_items_tenant_id', 'menu_items', ['tenant_id'])
    op.create_index('ix_menu_items_category_id', 'menu_items', ['category_id'])
    op.create_index('ix_menu_items_is_available', 'menu_items', ['is_available'])
    op.create_index('ix_menu_items_is_featured', 'menu_items', ['is_featured'])

    op.create_table(
        'customizations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('menu_item_id', sa.Uuid(), sa.ForeignKey('menu_items.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('required', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_customizations_menu_item_id', 'customizations', ['menu_item_id'])

    op.create_table(
        'tables',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(50), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('qr_code', sa.String(500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('tenant_id', 'number', name='uq_table_tenant_number'),
    )
    op.create_index('ix_tables_tenant_id', 'tables', ['tenant_id'])
    op.create_index('ix_tables_is_active', 'tables', ['is_active'])

    op.create_table(
        'customers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('total_orders', sa.Integer(), nullable=False),
        sa.Column('total_spent', sa.Numeric(12, 2), nullable=False),
        sa.Column('last_order_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('tenant_id', 'phone', name='uq_customer_tenant_phone'),
    )
    op.create_index('ix_customers_tenant_id', 'customers', ['tenant_id'])
    op.create_index('ix_customers_phone', 'customers', ['phone'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('order_number', sa.String(20), nullable=False),
        sa.Column('table_id', sa.Uuid(), sa.ForeignKey('tables.id'), nullable=True),
        sa.Column('customer_id', sa.Uuid(), sa.ForeignKey('customers.id'), nullable=True),
        sa.Column('customer_name', sa.String(255), nullable=True),
        sa.Column('customer_phone', sa.String(20), nullable=True),
        sa.Column('served_by', sa.Uuid(), nullable=True),
        sa.Column('status', order_status, nullable=False),
        sa.Column('payment_status', payment_status, nullable=False),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('tax', sa.Numeric(10, 2), nullable=False),
        sa.Column('tip', sa.Numeric(10, 2), nullable=False),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.Column('special_requests', sa.String(2000), nullable=True),
        sa.Column('estimated_time', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('tenant_id', 'order_number', name='uq_order_tenant_number'),
    )
    op.create_index('ix_orders_tenant_id', 'orders', ['tenant_id'])
    op.create_index('ix_orders_order_number', 'orders', ['order_number'])
    op.create_index('ix_orders_table_id', 'orders', ['table_id'])
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_payment_status', 'orders', ['payment_status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])

    op.create_table(
        'order_line_items',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('menu_item_id', sa.Uuid(), sa.ForeignKey('menu_items.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('customizations', sa.JSON(), nullable=True),
        sa.Column('notes', sa.String(500), nullable=True),
    )
    op.create_index('ix_order_line_items_order_id', 'order_line_items', ['order_id'])
    op.create_index('ix_order_line_items_menu_item_id', 'order_line_items', ['menu_item_id'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('order_id', sa.Uuid(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('invoice_number', sa.String(30), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=True),
        sa.Column('customer_phone', sa.String(20), nullable=True),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('tax_breakdown', sa.JSON(), nullable=True),
        sa.Column('total_tax', sa.Numeric(10, 2), nullable=False),
        sa.Column('discount', sa.Numeric(10, 2), nullable=False),
        sa.Column('tip', sa.Numeric(10, 2), nullable=False),
        sa.Column('grand_total', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('payment_status', payment_status, nullable=False),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('tenant_id', 'invoice_number', name='uq_invoice_tenant_number'),
    )
    op.create_index('ix_invoices_tenant_id', 'invoices', ['tenant_id'])
    op.create_index('ix_invoices_order_id', 'invoices', ['order_id'], unique=True)
    op.create_index('ix_invoices_invoice_number', 'invoices', ['invoice_number'])
    op.create_index('ix_invoices_created_at', 'invoices', ['created_at'])

    op.create_table(
        'invoice_sequences',
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), primary_key=True),
        sa.Column('day', sa.String(8), primary_key=True),
        sa.Column('last_value', sa.Integer(), nullable=False),
    )

    op.create_table(
        'otps',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('identifier', sa.String(255), nullable=False),
        sa.Column('code', sa.String(128), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_otps_identifier', 'otps', ['identifier'])
    op.create_index('ix_otps_expires_at', 'otps', ['expires_at'])
    op.create_index('ix_otps_created_at', 'otps', ['created_at'])

    op.create_table(
        'waiter_calls',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('table_id', sa.Uuid(), sa.ForeignKey('tables.id'), nullable=False),
        sa.Column('reason', sa.String(255), nullable=True),
        sa.Column('status', waiter_call_status, nullable=False),
        sa.Column('attended_by', sa.Uuid(), nullable=True),
        sa.Column('attended_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_waiter_calls_tenant_id', 'waiter_calls', ['tenant_id'])
    op.create_index('ix_waiter_calls_table_id', 'waiter_calls', ['table_id'])
    op.create_index('ix_waiter_calls_status', 'waiter_calls', ['status'])
    op.create_index('ix_waiter_calls_created_at', 'waiter_calls', ['created_at'])


def downgrade() -> None:
    op.drop_table('waiter_calls')
    op.drop_table('otps')
    op.drop_table('invoice_sequences')
    op.drop_table('invoices')
    op.drop_table('order_line_items')
    op.drop_table('orders')
    op.drop_table('customers')
    op.drop_table('tables')
    op.drop_table('customizations')
    op.drop_table('menu_items')
    op.drop_table('menu_categories')
    op.drop_table('platform_admins')
    op.drop_table('staff')
    op.drop_table('tax_settings')
    op.drop_table('brand_settings')
    op.drop_table('tenants')

    bind = op.get_bind()
    for enum in (waiter_call_status, payment_status, order_status, platform_role, staff_role, subscription_plan):
        enum.drop(bind, checkfirst=True)
