"""
Pagination and request helpers shared by the list selectors and views
"""
from django.core.paginator import Paginator


def parse_page(value, default=1):
    """Coerce a ?page= value to an int >= 1."""
    try:
        page = int(value)
    except (TypeError, ValueError):
        return default
    return max(1, page)


def paginate(object_list, page, page_size):
    """
    Paginate an ordered queryset/list.

    Page numbers below 1 become 1 and numbers past the end become the
    last page. total_pages is at least 1 even for an empty result.

    Returns:
        tuple: (Page, pagination dict with page/page_size/total/total_pages)
    """
    page_size = max(1, int(page_size))
    paginator = Paginator(object_list, page_size)
    page_obj = paginator.get_page(parse_page(page))

    pagination = {
        'page': page_obj.number,
        'page_size': page_size,
        'total': paginator.count,
        'total_pages': paginator.num_pages,
    }
    return page_obj, pagination


def first_value(params, key, default=None):
    """Read a single value from a QueryDict or a plain dict (lists use their first item)."""
    if params is None:
        return default
    if hasattr(params, 'getlist'):
        values = params.getlist(key)
        return values[0] if values else default
    value = params.get(key, default)
    if isinstance(value, (list, tuple)):
        return value[0] if value else default
    return value


def is_ajax(request):
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


def querystring_without_page(request):
    """Current query string minus ?page=, for building pagination links."""
    params = request.GET.copy()
    params.pop('page', None)
    return params.urlencode()
