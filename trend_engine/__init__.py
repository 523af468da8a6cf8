"""Console entry points for the Weibo trend analyzer."""
