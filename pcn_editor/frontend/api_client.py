import os

import requests

DEFAULT_API_URL = "http://localhost:8000/api"


class APIError(Exception):
    def __init__(self, code, message, status=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status


class APIClient:
    def __init__(self, base_url=None, token=None, timeout=30):
        self.base_url = (base_url or os.environ.get("PCN_API_URL", DEFAULT_API_URL)).rstrip('/')
        self.token = token if token is not None else os.environ.get("PCN_API_TOKEN", "")
        self.timeout = timeout
        self.headers = {}
        if self.token:
            self.headers['Authorization'] = f'Token {self.token}'

    def _post(self, endpoint, **kwargs):
        url = f"{self.base_url}/{endpoint}/"
        try:
            response = requests.post(url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise APIError("CONNECTION_ERROR", f"Could not reach {url}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            raise APIError("BAD_RESPONSE", f"Unexpected response ({response.status_code})",
                           response.status_code) from None

        if response.status_code != 200 or not body.get('success'):
            raise APIError(body.get('code', 'UNKNOWN'), body.get('error', response.text),
                           response.status_code)
        return body['data']

    def parse_file(self, path, layout=None):
        data = {'layout': layout} if layout else {}
        with open(path, 'rb') as f:
            files = {'file': (os.path.basename(path), f, 'text/plain')}
            return self._post('parse', files=files, data=data)

    def parse_content(self, content, layout=None):
        payload = {'file_content': content}
        if layout:
            payload['layout'] = layout
        return self._post('parse', json=payload)

    def update_receipt(self, content, row_index, allocation_number, layout=None):
        payload = {
            'file_content': content,
            'row_index': row_index,
            'allocation_number': allocation_number,
        }
        if layout:
            payload['layout'] = layout
        return self._post('update-receipt', json=payload)

    def search(self, content, receipt_number, business_number=None, layout=None):
        payload = {'file_content': content, 'receipt_number': receipt_number}
        if business_number:
            payload['business_number'] = business_number
        if layout:
            payload['layout'] = layout
        return self._post('search', json=payload)
