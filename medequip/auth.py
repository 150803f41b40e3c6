from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, login_required, current_user
from urllib.parse import urlparse
from medequip import limiter
from medequip.buisness.core.service_registry import get_services
from medequip.utils.logger import get_logger

logger = get_logger("medequip.auth")
auth = Blueprint('auth', __name__)


@auth.route('/login', methods=['GET', 'POST'])
@limiter.limit("10 per minute", methods=['POST'])
def login():
    if current_user.is_authenticated:
        logger.debug(f"User {current_user.username} already authenticated, redirecting to main")
        return redirect(url_for('main.index'))

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        logger.debug(f"Login attempt for username: {username}")

        if not username or not password:
            logger.warning(f"Login attempt with missing credentials for username: {username}")
            flash('กรุณากรอกชื่อผู้ใช้งานและรหัสผ่าน', 'error')
            return render_template('auth/login.html', username=username)

        user = get_services().users.authenticate(username, password)
        if user is None:
            logger.warning(f"Failed login attempt for username: {username}")
            flash('ชื่อผู้ใช้งานหรือรหัสผ่านไม่ถูกต้อง', 'error')
            return render_template('auth/login.html', username=username)

        login_user(user)
        logger.info(f"Successful login for user: {username} ({user.role.value})")

        # Redirect to next page or home
        next_page = request.args.get('next')
        if not next_page or urlparse(next_page).netloc != '':
            next_page = url_for('main.index')

        flash(f'ยินดีต้อนรับ, {user.username}!', 'success')
        return redirect(next_page)

    logger.debug("Login page accessed")
    return render_template('auth/login.html')


@auth.route('/register', methods=['GET', 'POST'])
@limiter.limit("5 per minute", methods=['POST'])
def register():
    services = get_services()
    departments = services.settings.departments

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')
        department = request.form.get('department', '').strip()
        if department == '__other__':
            department = request.form.get('new_department', '').strip()

        try:
            registered = services.users.register(username, password, department=department)
        except ValueError as e:
            logger.warning(f"Registration rejected: {e}")
            flash(str(e), 'error')
            return render_template('auth/register.html', departments=departments, username=username)

        if not registered:
            flash('ชื่อผู้ใช้งานนี้มีอยู่แล้ว', 'error')
            return render_template('auth/register.html', departments=departments, username=username)

        flash('ลงทะเบียนสำเร็จ กรุณาเข้าสู่ระบบ', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', departments=departments)


@auth.route('/logout')
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    flash('ออกจากระบบแล้ว', 'info')
    return redirect(url_for('auth.login'))
