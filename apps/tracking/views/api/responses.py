"""
JSON responses shared by the API views
"""
from django.http import JsonResponse


def error_response(message, status=400, **extra):
    return JsonResponse({'status': 'error', 'message': message, **extra}, status=status)


def validation_error_response(error):
    return error_response(str(error), status=400, field=error.field, code=error.code)


def unauthorized_response():
    # no detail on purpose, callers only learn the request was refused
    return JsonResponse({'status': 'error'}, status=403)


def storage_error_response():
    return error_response('Storage error', status=500)


def merged_params(request):
    """GET and POST parameters, POST wins (devices and proxies use both)"""
    params = request.GET.dict()
    params.update(request.POST.dict())
    return params
