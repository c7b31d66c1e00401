"""landing page schema and component variation catalog

Revision ID: 001_landing_page_schema
Revises:
Create Date: 2026-06-02 10:00:00.000000

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_landing_page_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UTC_NOW = sa.text("timezone('utc', now())")

CHECKOUT = {"ctaButton": {"action_type": "marketplace_checkout"}}

# (type, number, name, display name, description, layout, parts, default content, limits, images, video)
VARIATIONS = [
    ("hero", 1, "centered", "Centered Hero", "Big centered headline with a single call to action. Works for most products.",
     "centered", ["headline", "subheadline", "ctaButton", "heroImage"],
     {"headline": "Build Amazing Landing Pages", "subheadline": "Create professional landing pages in minutes", "ctaButton": "Get Started Now"},
     {"headline": 60, "subheadline": 120, "ctaButton": 25}, 1, False),
    ("hero", 2, "split-features", "Split Hero with Features", "Text and bullet features on one side, product image on the other.",
     "split", ["headline", "subheadline", "features", "ctaButton", "productImage"],
     {"headline": "Everything You Need", "subheadline": "One product, every feature", "features": ["Fast setup", "No code required", "Cancel anytime"], "ctaButton": "Buy Now"},
     {"headline": 60, "subheadline": 120, "ctaButton": 25}, 1, False),
    ("hero", 3, "split-pricing", "Split Hero with Price", "Badge, feature cards, visible price and trust signals. Good for direct sales.",
     "split", ["badge", "headline", "subheadline", "price", "ctaButton", "secondaryButton", "productImage"],
     {"badge": "New", "headline": "The Smart Choice", "subheadline": "Premium quality at a fair price", "price": "49", "priceLabel": "one-time", "ctaButton": "Order Now", "secondaryButton": "Learn More"},
     {"headline": 60, "subheadline": 120, "ctaButton": 25, "badge": 20}, 1, False),
    ("hero", 4, "background-image", "Background Image Hero", "Full-width background image with overlaid copy. Best for visual products.",
     "background", ["headline", "subheadline", "ctaButton", "backgroundImage"],
     {"headline": "See It to Believe It", "subheadline": "Designed to stand out", "ctaButton": "Shop Now"},
     {"headline": 60, "subheadline": 120, "ctaButton": 25}, 1, False),
    ("hero", 5, "social-proof", "Social Proof Hero", "Headline backed by customer numbers and trust badges.",
     "centered", ["headline", "subheadline", "socialProof", "trustBadges", "ctaButton"],
     {"headline": "Loved by Thousands", "subheadline": "Join a growing community", "socialProof": "Rated 4.9/5 by 2,000+ customers", "trustBadges": ["Secure payment", "Fast delivery"], "ctaButton": "Join Now"},
     {"headline": 60, "subheadline": 120, "ctaButton": 25}, 0, False),
    ("hero", 6, "video", "Video Hero", "Centered copy with an embedded product video.",
     "centered", ["headline", "subheadline", "description", "ctaButton", "videoUrl"],
     {"headline": "Watch It in Action", "subheadline": "Two minutes is all it takes", "ctaButton": "Get Started"},
     {"headline": 60, "subheadline": 120, "ctaButton": 25}, 0, True),
    ("features", 1, "grid", "Feature Grid", "Three-column grid of features with icons.",
     "grid", ["sectionTitle", "description", "featureList"],
     {"sectionTitle": "Why Choose Us", "description": "Discover what makes us different", "featureList": [{"title": "Fast Performance", "description": "Lightning-fast loading times", "icon": "zap"}]},
     {"sectionTitle": 60}, 0, False),
    ("features", 2, "alternating", "Alternating Features", "Image and text rows that alternate sides.",
     "split", ["sectionTitle", "featureList"],
     {"sectionTitle": "How It Helps", "featureList": [{"title": "Saves Time", "description": "Automates the boring parts"}]},
     {"sectionTitle": 60}, 2, False),
    ("features", 3, "list", "Feature Checklist", "Compact checklist of benefits next to a product image.",
     "split", ["sectionTitle", "featureList", "productImage"],
     {"sectionTitle": "What You Get", "featureList": [{"title": "Lifetime updates", "description": ""}]},
     {"sectionTitle": 60}, 1, False),
    ("features", 4, "cards", "Feature Cards", "Large cards with a short description each.",
     "grid", ["sectionTitle", "description", "featureList"],
     {"sectionTitle": "Built for You", "featureList": [{"title": "Easy to Use", "description": "No learning curve"}]},
     {"sectionTitle": 60}, 0, False),
    ("testimonials", 1, "cards", "Testimonial Cards", "Customer quotes in cards with ratings.",
     "grid", ["sectionTitle", "testimonials"],
     {"sectionTitle": "What Our Customers Say", "testimonials": [{"name": "John Doe", "text": "Amazing product!", "rating": 5}]},
     {"sectionTitle": 60}, 0, False),
    ("testimonials", 2, "spotlight", "Testimonial Spotlight", "One large featured quote with author photo.",
     "centered", ["sectionTitle", "testimonials"],
     {"sectionTitle": "Customer Stories", "testimonials": [{"name": "Jane Smith", "text": "It changed how I work.", "rating": 5}]},
     {"sectionTitle": 60}, 0, False),
    ("pricing", 1, "tiers", "Pricing Tiers", "Side-by-side pricing cards.",
     "grid", ["sectionTitle", "pricingCards"],
     {"sectionTitle": "Choose Your Plan", "pricingCards": [{"name": "Basic", "price": "29", "features": ["Feature 1", "Feature 2"], "cta": "Get Started"}]},
     {"sectionTitle": 60}, 0, False),
    ("faq", 1, "accordion", "FAQ Accordion", "Collapsible questions and answers.",
     "centered", ["sectionTitle", "faqItems"],
     {"sectionTitle": "Frequently Asked Questions", "faqItems": [{"question": "How does it work?", "answer": "It works by..."}]},
     {"sectionTitle": 60}, 0, False),
    ("cta", 1, "banner", "CTA Banner", "Full-width colored banner with one button. Simple and direct.",
     "centered", ["headline", "description", "ctaButton"],
     {"headline": "Ready to Get Started?", "description": "Join thousands of satisfied customers today", "ctaButton": "Start Now"},
     {"headline": 60, "ctaButton": 25}, 0, False),
    ("cta", 2, "urgency", "Urgency CTA", "Limited-time message with urgency text. Good for launches and promotions.",
     "centered", ["headline", "description", "urgencyText", "ctaButton"],
     {"headline": "Don't Miss Out", "description": "Our launch price ends soon", "ctaButton": "Claim Offer", "urgencyText": "Limited time offer!"},
     {"headline": 60, "ctaButton": 25}, 0, False),
    ("cta", 3, "split-image", "CTA with Image", "Call to action next to a product image.",
     "split", ["headline", "description", "ctaButton", "productImage"],
     {"headline": "Make It Yours", "description": "Order today, ships tomorrow", "ctaButton": "Buy Now"},
     {"headline": 60, "ctaButton": 25}, 1, False),
]


def upgrade() -> None:
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('seller_id', postgresql.UUID(as_uuid=False), nullable=True, index=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('original_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('categories', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('preview_image_url', sa.String(), nullable=True),
        sa.Column('product_type', sa.String(), nullable=True),
        sa.Column('archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
    )
    op.create_table(
        'product_media',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('product_id', postgresql.UUID(as_uuid=False), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('url', sa.String(), nullable=False),
        sa.Column('media_type', sa.String(length=16), nullable=False, server_default='image'),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_table(
        'component_variations',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('component_type', sa.String(length=32), nullable=False, index=True),
        sa.Column('variation_name', sa.String(), nullable=False),
        sa.Column('variation_number', sa.Integer(), nullable=False),
        sa.Column('display_name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('available_parts', postgresql.ARRAY(sa.String()), nullable=False, server_default='{}'),
        sa.Column('default_content', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('character_limits', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('required_images', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('supports_video', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('layout_type', sa.String(length=32), nullable=True),
        sa.Column('button_actions', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('visibility_keys', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('component_type', 'variation_number', name='uq_component_variation_type_number'),
    )
    op.create_table(
        'landing_pages',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('product_id', postgresql.UUID(as_uuid=False), sa.ForeignKey('products.id'), nullable=True, index=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=False), nullable=True, index=True),
        sa.Column('slug', sa.String(), nullable=False, unique=True),
        sa.Column('custom_domain', sa.String(), nullable=True),
        sa.Column('language', sa.String(length=8), nullable=False, server_default='en'),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='draft', index=True),
        sa.Column('netlify_site_id', sa.String(), nullable=True),
        sa.Column('deployed_url', sa.String(), nullable=True),
        sa.Column('last_deployed_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('global_theme', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('seo_config', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('tracking_config', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
    )
    op.create_table(
        'landing_page_components',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('page_id', postgresql.UUID(as_uuid=False), sa.ForeignKey('landing_pages.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('component_variation_id', postgresql.UUID(as_uuid=False), sa.ForeignKey('component_variations.id'), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('content', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('styles', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('custom_styles', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('visibility', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('media_urls', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('custom_actions', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
    )
    op.create_table(
        'deployment_jobs',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('landing_page_id', postgresql.UUID(as_uuid=False), sa.ForeignKey('landing_pages.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending', index=True),
        sa.Column('output_format', sa.String(length=32), nullable=False, server_default='html'),
        sa.Column('deploy_id', sa.String(), nullable=True, index=True),
        sa.Column('site_id', sa.String(), nullable=True),
        sa.Column('deploy_url', sa.String(), nullable=True),
        sa.Column('provider_state', sa.String(length=32), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('job_data', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False),
        sa.Column('completed_at', sa.TIMESTAMP(timezone=True), nullable=True),
    )

    variations = sa.table(
        'component_variations',
        sa.column('id', postgresql.UUID(as_uuid=False)),
        sa.column('component_type', sa.String()),
        sa.column('variation_name', sa.String()),
        sa.column('variation_number', sa.Integer()),
        sa.column('display_name', sa.String()),
        sa.column('description', sa.Text()),
        sa.column('layout_type', sa.String()),
        sa.column('available_parts', postgresql.ARRAY(sa.String())),
        sa.column('default_content', postgresql.JSONB()),
        sa.column('character_limits', postgresql.JSONB()),
        sa.column('required_images', sa.Integer()),
        sa.column('supports_video', sa.Boolean()),
        sa.column('button_actions', postgresql.JSONB()),
        sa.column('visibility_keys', postgresql.JSONB()),
        sa.column('is_active', sa.Boolean()),
    )
    op.bulk_insert(variations, [
        {
            'id': str(uuid.uuid4()),
            'component_type': component_type,
            'variation_name': name,
            'variation_number': number,
            'display_name': display_name,
            'description': description,
            'layout_type': layout,
            'available_parts': parts,
            'default_content': content,
            'character_limits': limits,
            'required_images': images,
            'supports_video': video,
            'button_actions': CHECKOUT if 'ctaButton' in parts else {},
            'visibility_keys': {part: True for part in parts},
            'is_active': True,
        }
        for component_type, number, name, display_name, description, layout, parts, content, limits, images, video in VARIATIONS
    ])


def downgrade() -> None:
    op.drop_table('deployment_jobs')
    op.drop_table('landing_page_components')
    op.drop_table('landing_pages')
    op.drop_table('component_variations')
    op.drop_table('product_media')
    op.drop_table('products')
