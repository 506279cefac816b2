"""
Demo data for local development.

    python manage.py seed_crm
    python manage.py seed_crm --contacts 200 --random-seed 7

Sizes default to the SEED_* settings. Existing CRM data is wiped first.
"""
import logging
import random
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from apps.accounts.models import User, TeamMember, SessionLog, ROLE_ADMIN, ROLE_MEMBER
from apps.activities.models import Activity, STATUS_COMPLETED
from apps.contacts.models import Contact, ContactTag
from apps.contacts.utils import TAG_PALETTE
from apps.core import cache
from apps.core.models import Company, Tag
from apps.opportunities.models import Opportunity

logger = logging.getLogger(__name__)

BATCH_SIZE = 500

FIRST_NAMES = [
    'Ana', 'Luis', 'Sara', 'Omar', 'Maria', 'Jorge', 'Elena', 'Diego', 'Lucia', 'Pablo',
    'Nadia', 'Tomas', 'Irene', 'Mateo', 'Clara', 'Hugo', 'Paula', 'Ivan', 'Rosa', 'Samuel',
]
LAST_NAMES = [
    'Lopez', 'Garcia', 'Martinez', 'Rodriguez', 'Hernandez', 'Perez', 'Sanchez', 'Ramirez',
    'Torres', 'Flores', 'Rivera', 'Gomez', 'Diaz', 'Cruz', 'Morales', 'Reyes', 'Ortiz', 'Vargas',
]
JOB_TITLES = [
    'Account Executive', 'Sales Manager', 'Operations Lead', 'CTO', 'Procurement Officer',
    'Marketing Director', 'Customer Success Manager', 'Founder',
]
COMPANY_WORDS = [
    'Acme', 'Northwind', 'Globex', 'Initech', 'Umbrella', 'Stark', 'Wayne', 'Hooli',
    'Vandelay', 'Soylent', 'Cyberdyne', 'Tyrell', 'Wonka', 'Aperture', 'Pied Piper',
]
COMPANY_SUFFIXES = ['Labs', 'Group', 'Industries', 'Systems', 'Partners', 'Logistics', 'Foods']
INDUSTRIES = ['Software', 'Retail', 'Health', 'Manufacturing', 'Finance', 'Education', 'Logistics']
LOCATIONS = [
    ('Mexico City', 'CDMX', 'Mexico'),
    ('Guadalajara', 'Jalisco', 'Mexico'),
    ('Monterrey', 'Nuevo Leon', 'Mexico'),
    ('Madrid', 'Madrid', 'Spain'),
    ('Bogota', 'Cundinamarca', 'Colombia'),
    ('Austin', 'Texas', 'United States'),
    ('Lima', 'Lima', 'Peru'),
]
BASE_TAGS = [
    'VIP', 'High priority', 'Demo pending', 'Renewal', 'Upsell', 'Support', 'Marketing', 'Key accounts',
]
DEAL_PREFIXES = ['Annual license', 'Pilot', 'Expansion', 'Support plan', 'Migration', 'Onboarding']
NOTES = [
    'Met at the trade fair.',
    'Prefers email over calls.',
    'Budget review next quarter.',
    'Asked for a product demo.',
    'Referred by an existing customer.',
]

OPPORTUNITY_STATUSES = [status for status, _label in Opportunity.STATUS_CHOICES]
ACTIVITY_TYPES = [activity_type for activity_type, _label in Activity.TYPE_CHOICES]
ACTIVITY_STATUSES = [status for status, _label in Activity.STATUS_CHOICES]


class Command(BaseCommand):
    help = 'Wipe CRM data and load a demo team, companies, contacts, opportunities and activities.'

    def add_arguments(self, parser):
        parser.add_argument('--team', type=int, default=settings.SEED_TEAM_SIZE)
        parser.add_argument('--contacts', type=int, default=settings.SEED_CONTACT_SIZE)
        parser.add_argument('--opportunities', type=int, default=settings.SEED_OPPORTUNITY_SIZE)
        parser.add_argument('--activities', type=int, default=settings.SEED_ACTIVITY_SIZE)
        parser.add_argument('--random-seed', type=int, default=None, help='Make the generated data reproducible')

    def handle(self, *args, **options):
        self.rng = random.Random(options['random_seed'])
        self.email_registry = set()

        with transaction.atomic():
            self.stdout.write('Clearing previous data...')
            self.clear()

            team = self.create_team(max(1, options['team']))
            companies = self.create_companies(options['contacts'])
            tags = self.create_tags()
            contacts = self.create_contacts(options['contacts'], companies, team)
            links = self.tag_contacts(contacts, tags)
            opportunities = self.create_opportunities(options['opportunities'], contacts, companies, team)
            activities = self.create_activities(options['activities'], contacts, opportunities, team)
            self.upsert_admin()

        cache.invalidate_topics(*cache.TOPICS)

        summary = {
            'team members': len(team),
            'companies': len(companies),
            'contacts': len(contacts),
            'contact tags': links,
            'opportunities': len(opportunities),
            'activities': activities,
        }
        for label, count in summary.items():
            self.stdout.write(f'  {label}: {count}')
        self.stdout.write(self.style.SUCCESS('Seed completed'))
        logger.info("Seeded CRM demo data: %s", summary)

    def clear(self):
        Activity.objects.all().delete()
        Opportunity.objects.all().delete()
        ContactTag.objects.all().delete()
        Contact.objects.all().delete()
        Company.objects.all().delete()
        Tag.objects.all().delete()
        SessionLog.objects.all().delete()
        TeamMember.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def unique_email(self, first_name, last_name, domain='crm.test'):
        base = f'{first_name}.{last_name}'.lower()
        email = f'{base}@{domain}'
        counter = 1
        while email in self.email_registry:
            counter += 1
            email = f'{base}{counter}@{domain}'
        self.email_registry.add(email)
        return email

    def person(self):
        return self.rng.choice(FIRST_NAMES), self.rng.choice(LAST_NAMES)

    def create_team(self, size):
        self.stdout.write('Creating team...')
        members = []
        for _index in range(size):
            first_name, last_name = self.person()
            members.append(TeamMember(
                name=f'{first_name} {last_name}',
                email=self.unique_email(first_name, last_name),
                role=self.rng.choice(JOB_TITLES),
            ))
        TeamMember.objects.bulk_create(members, batch_size=BATCH_SIZE)
        members = list(TeamMember.objects.all())

        self.stdout.write('Creating accounts for the team...')
        # One hash for everybody; hashing per user would dominate the run
        password_hash = make_password(settings.SEED_TEAM_PASSWORD)
        User.objects.bulk_create(
            [
                User(email=member.email, name=member.name, role=ROLE_MEMBER, password=password_hash)
                for member in members
            ],
            batch_size=BATCH_SIZE,
            ignore_conflicts=True,
        )
        users = dict(User.objects.filter(email__in=[m.email for m in members]).values_list('email', 'id'))
        for member in members:
            member.user_id = users.get(member.email)
        TeamMember.objects.bulk_update(members, ['user'], batch_size=BATCH_SIZE)
        return members

    def create_companies(self, contact_size):
        self.stdout.write('Creating companies...')
        count = max(1, min(contact_size // 20, 200))
        companies = {}
        for _index in range(count):
            name = f'{self.rng.choice(COMPANY_WORDS)} {self.rng.choice(COMPANY_SUFFIXES)}'
            city, _state, country = self.rng.choice(LOCATIONS)
            # Respect the (name, city, country) uniqueness
            companies.setdefault((name.lower(), city, country), Company(
                name=name,
                city=city,
                country=country,
                industry=self.rng.choice(INDUSTRIES),
                website=f'https://{slugify(name)}.example.com',
                description=self.rng.choice(NOTES),
            ))
        Company.objects.bulk_create(companies.values(), batch_size=BATCH_SIZE)
        return list(Company.objects.all())

    def create_tags(self):
        self.stdout.write('Creating tags...')
        Tag.objects.bulk_create([
            Tag(name=name, slug=slugify(name), color=TAG_PALETTE[index % len(TAG_PALETTE)])
            for index, name in enumerate(BASE_TAGS)
        ])
        return list(Tag.objects.all())

    def create_contacts(self, size, companies, team):
        self.stdout.write('Creating contacts...')
        contacts = []
        for _index in range(size):
            first_name, last_name = self.person()
            city, state, country = self.rng.choice(LOCATIONS)
            contacts.append(Contact(
                first_name=first_name,
                last_name=last_name,
                email=self.unique_email(first_name, last_name, domain='example.com'),
                phone=f'+52 55 {self.rng.randint(1000, 9999)} {self.rng.randint(1000, 9999)}',
                job_title=self.rng.choice(JOB_TITLES),
                city=city,
                state=state,
                country=country,
                notes=self.rng.choice(NOTES),
                company=self.rng.choice(companies),
                owner=self.rng.choice(team),
            ))
        Contact.objects.bulk_create(contacts, batch_size=BATCH_SIZE)
        return list(Contact.objects.only('id', 'company_id'))

    def tag_contacts(self, contacts, tags):
        self.stdout.write('Tagging contacts...')
        links = []
        for contact in contacts:
            for tag in self.rng.sample(tags, self.rng.randint(0, min(3, len(tags)))):
                links.append(ContactTag(content_object=contact, tag=tag))
        ContactTag.objects.bulk_create(links, batch_size=BATCH_SIZE * 2)
        return len(links)

    def create_opportunities(self, size, contacts, companies, team):
        self.stdout.write('Creating opportunities...')
        if not contacts:
            return []

        today = timezone.localdate()
        opportunities = []
        for index in range(size):
            contact = self.rng.choice(contacts)
            company_id = contact.company_id or self.rng.choice(companies).pk
            opportunities.append(Opportunity(
                title=f'{self.rng.choice(DEAL_PREFIXES)} - {self.rng.choice(COMPANY_WORDS)}',
                description=self.rng.choice(NOTES),
                value=Decimal(self.rng.randint(5000, 200000)),
                status=OPPORTUNITY_STATUSES[index % len(OPPORTUNITY_STATUSES)],
                estimated_close_date=today + timedelta(days=self.rng.randint(0, 120)),
                company_id=company_id,
                contact_id=contact.pk,
                owner=self.rng.choice(team),
            ))
        Opportunity.objects.bulk_create(opportunities, batch_size=BATCH_SIZE)
        return list(Opportunity.objects.only('id'))

    def create_activities(self, size, contacts, opportunities, team):
        self.stdout.write('Logging activities...')
        if not contacts:
            return 0

        now = timezone.now()
        activities = []
        for _index in range(size):
            activity_type = self.rng.choice(ACTIVITY_TYPES)
            status = self.rng.choice(ACTIVITY_STATUSES)
            opportunity = self.rng.choice(opportunities) if opportunities and self.rng.random() < 0.4 else None
            activities.append(Activity(
                activity_type=activity_type,
                status=status,
                subject=f'{activity_type.title()} with {self.rng.choice(COMPANY_WORDS)}',
                notes=self.rng.choice(NOTES),
                scheduled_for=now + timedelta(days=self.rng.randint(-45, 30), hours=self.rng.randint(8, 18)),
                due_date=now + timedelta(days=self.rng.randint(0, 60)),
                completed_at=now - timedelta(days=self.rng.randint(0, 10)) if status == STATUS_COMPLETED else None,
                contact=self.rng.choice(contacts),
                opportunity=opportunity,
                team_member=self.rng.choice(team),
            ))
        Activity.objects.bulk_create(activities, batch_size=BATCH_SIZE)
        return len(activities)

    def upsert_admin(self):
        self.stdout.write('Creating administrator...')
        email = User.objects.normalize_email(settings.SEED_ADMIN_EMAIL)

        admin_user = User.objects.filter(email=email).first()
        if admin_user is None:
            admin_user = User(email=email)
        admin_user.name = 'CRM Administrator'
        admin_user.role = ROLE_ADMIN
        admin_user.set_password(settings.SEED_ADMIN_PASSWORD)
        admin_user.save()

        TeamMember.objects.update_or_create(
            email=email,
            defaults={'name': admin_user.name, 'role': 'Administrator', 'user': admin_user},
        )
        return admin_user
