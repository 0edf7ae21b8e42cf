from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_list(name, default):
    value = os.environ.get(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


'''Venue variables'''
VENUE_NAME = os.environ.get("VENUE_NAME", "Venue Dashboard")
VENUE_ALERT_DAYS_DEFAULT = int(os.environ.get("VENUE_ALERT_DAYS_DEFAULT", "10"))
'''End of Venue'''

'''Auth variables'''
LOGIN_URL = "/accounts/login/"
LOGIN_REDIRECT_URL = "/"
LOGOUT_REDIRECT_URL = "/accounts/login/"
'''End of Auth'''

# Database file can be swapped per environment, e.g. a scratch copy for demos:
# VENUE_DB_FILE=/tmp/venue-demo.sqlite3 python manage.py runserver
db_file = Path(os.environ.get("VENUE_DB_FILE", BASE_DIR / "db.sqlite3"))

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': db_file,
    }
}

SECRET_KEY = os.environ.get("VENUE_SECRET_KEY", "django-insecure-local-dev")
DEBUG = env_bool("VENUE_DEBUG", True)
ALLOWED_HOSTS = env_list("VENUE_ALLOWED_HOSTS", ["localhost", "127.0.0.1", "testserver"])

INSTALLED_APPS = [
    "accounts.apps.AccountsConfig",
    "events.apps.EventsConfig",
    "expenses.apps.ExpensesConfig",
    "calendar_app.apps.CalendarAppConfig",
    "dashboard.apps.DashboardConfig",
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'core.middleware.StoreErrorMiddleware',
]

ROOT_URLCONF = 'core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'accounts.context_processors.permissions_gate',
            ],
        },
    },
]

WSGI_APPLICATION = 'core.wsgi.application'

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = os.environ.get("VENUE_TIME_ZONE", 'America/Sao_Paulo')
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'

# In production, collect all static files here:
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

VENUE_APPS = ['core', 'accounts', 'events', 'expenses', 'calendar_app', 'dashboard']
VENUE_LOG_LEVEL = os.environ.get("VENUE_LOG_LEVEL", "INFO")

# Per-app loggers at VENUE_LOG_LEVEL.
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': VENUE_LOG_LEVEL,
    },
    'loggers': {
        'django.db.backends': {
            'level': 'WARNING',
        },
        **{
            app: {'handlers': ['console'], 'level': VENUE_LOG_LEVEL, 'propagate': False}
            for app in VENUE_APPS
        },
    },
}


''' Directory structure:
#this is the PROJECT directory tree for venue_dashboard
venue_dashboard/
└── core/
    ├── settings.py
    ├── urls.py
    ├── exceptions.py
    ├── middleware.py
    └── wsgi.py

#Each APPLICATION follows the same layout
venue_dashboard/
└── events/
    ├── models.py
    ├── payments.py
    ├── services.py
    ├── forms.py
    ├── views.py
    ├── admin.py
    ├── management/
    └── tests/

'''
