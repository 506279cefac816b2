from django.shortcuts import render, redirect
from django.contrib.auth import login, logout, update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_POST
from django.views.decorators.cache import never_cache

from apps.core.actions import is_success
from apps.core.forms import apply_field_errors
from .actions import register_user, update_profile, change_password
from .auth import authenticate_credentials
from .forms import LoginForm, RegisterForm, ProfileUpdateForm, ChangePasswordForm


def _safe_next_url(request):
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return next_url
    return None


# AUTHENTICATION VIEWS
@never_cache
def login_view(request):
    # If already logged in, redirect to dashboard
    if request.user.is_authenticated:
        return redirect('core:dashboard')

    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            user, principal = authenticate_credentials(
                request,
                form.cleaned_data['email'],
                form.cleaned_data['password'],
            )

            if user is not None:
                # Login user (creates session, fires user_logged_in)
                login(request, user)

                if form.cleaned_data.get('remember'):
                    # Session expires in 30 days
                    request.session.set_expiry(30 * 24 * 60 * 60)
                else:
                    # Session expires when browser closes
                    request.session.set_expiry(0)

                request.session['team_member_id'] = principal.team_member_id

                messages.success(
                    request,
                    _('Welcome back, {}!').format(user.get_short_name())
                )

                return redirect(_safe_next_url(request) or 'core:dashboard')

            messages.error(
                request,
                _('Invalid email or password. Please try again.')
            )
        else:
            messages.error(request, _('Please correct the errors below.'))

    else:
        form = LoginForm()

    context = {
        'form': form,
        'page_title': _('Login'),
    }

    return render(request, 'accounts/login.html', context)


@login_required
@require_POST
def logout_view(request):
    logout(request)
    messages.success(request, _('You have been logged out.'))
    return redirect('accounts:login')


@never_cache
def register_view(request):
    if request.user.is_authenticated:
        return redirect('core:dashboard')

    if request.method == 'POST':
        form = RegisterForm(request.POST)
        state = register_user(request.POST)

        if is_success(state):
            messages.success(request, state['message'])
            return redirect('accounts:login')

        if form.is_valid():
            apply_field_errors(form, state)
        messages.error(request, state['message'])
    else:
        form = RegisterForm()

    return render(request, 'accounts/register.html', {
        'form': form,
        'page_title': _('Create account'),
    })


# PROFILE VIEWS
@login_required
def profile_view(request):
    user = request.user

    if request.method == 'POST':
        form = ProfileUpdateForm(request.POST, user=user)
        state = update_profile(user, request.POST)

        if is_success(state):
            messages.success(request, state['message'])
            return redirect('accounts:profile')

        if form.is_valid():
            apply_field_errors(form, state)
        messages.error(request, state['message'])
    else:
        form = ProfileUpdateForm(user=user, initial={'name': user.name, 'role': user.role})

    context = {
        'form': form,
        'team_member': getattr(user, 'team_member', None),
        'page_title': _('My Profile'),
    }

    return render(request, 'accounts/profile.html', context)


@login_required
def security_view(request):
    user = request.user

    if request.method == 'POST':
        form = ChangePasswordForm(request.POST)
        state = change_password(user, request.POST)

        if is_success(state):
            # Keep the user logged in after the hash changes
            update_session_auth_hash(request, user)
            messages.success(request, state['message'])
            return redirect('accounts:security')

        if form.is_valid():
            apply_field_errors(form, state)
        messages.error(request, state['message'])
    else:
        form = ChangePasswordForm()

    context = {
        'form': form,
        'session_logs': user.session_logs.all()[:10],
        'page_title': _('Security'),
    }

    return render(request, 'accounts/security.html', context)
